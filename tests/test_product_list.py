"""Tests for the product grid and soft delete."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from catalog_admin.extensions import db
from catalog_admin.models import Product


@pytest.fixture
def products(app):
    rows = [
        Product(name="Alpha", price=Decimal("1"), is_published=True, created_on=datetime(2024, 1, 10)),
        Product(name="Bravo", price=Decimal("2"), is_published=False, created_on=datetime(2024, 2, 10)),
        Product(name="Charlie", price=Decimal("3"), is_published=True, created_on=datetime(2024, 3, 10)),
        Product(name="Delta", price=Decimal("4"), is_published=True, is_deleted=True,
                created_on=datetime(2024, 4, 10)),
        Product(name="Echo", price=Decimal("5"), is_published=False, created_on=datetime(2024, 5, 10)),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


def _grid(client, **body):
    return client.post("/admin/products/grid", json=body)


class TestProductGrid:
    def test_default_grid(self, client, products):
        resp = _grid(client)

        assert resp.status_code == 200
        data = resp.get_json()
        assert data["total_record"] == 4
        assert data["number_of_pages"] == 1
        # newest id first
        assert [i["name"] for i in data["items"]] == ["Echo", "Charlie", "Bravo", "Alpha"]
        assert set(data["items"][0]) == {"id", "name", "created_on", "is_published"}
        assert data["items"][-1]["created_on"] == "2024-01-10T00:00:00"

    @pytest.mark.parametrize("start, number", [(0, 1), (0, 2), (1, 2), (2, 10), (3, 100)])
    def test_deleted_never_listed(self, client, products, start, number):
        data = _grid(client, pagination={"start": start, "number": number}).get_json()

        assert data["total_record"] == 4
        assert "Delta" not in [i["name"] for i in data["items"]]

    def test_paging_and_sorting(self, client, products):
        data = _grid(
            client,
            pagination={"start": 2, "number": 2},
            sort={"predicate": "name", "reverse": False},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Charlie", "Echo"]
        assert data["number_of_pages"] == 2

    def test_reverse_sort(self, client, products):
        data = _grid(client, sort={"predicate": "created_on", "reverse": True}).get_json()

        assert [i["name"] for i in data["items"]] == ["Echo", "Charlie", "Bravo", "Alpha"]

    def test_filter_by_name(self, client, products):
        data = _grid(client, search={"predicate_object": {"name": "LPH"}}).get_json()

        assert [i["name"] for i in data["items"]] == ["Alpha"]

    def test_filter_by_published(self, client, products):
        data = _grid(
            client,
            sort={"predicate": "name"},
            search={"predicate_object": {"is_published": True}},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Alpha", "Charlie"]

    def test_filter_by_published_string(self, client, products):
        data = _grid(
            client,
            sort={"predicate": "name"},
            search={"predicate_object": {"is_published": "false"}},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Bravo", "Echo"]

    def test_filter_by_created_on(self, client, products):
        data = _grid(
            client,
            sort={"predicate": "name"},
            search={"predicate_object": {"created_on": {"after": "2024-02-01", "before": "2024-05-09"}}},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Bravo", "Charlie"]

    def test_date_only_before_includes_that_day(self, client, products):
        data = _grid(
            client,
            sort={"predicate": "name"},
            search={"predicate_object": {"created_on": {"after": "2024-02-10", "before": "2024-03-10"}}},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Bravo", "Charlie"]

    def test_timestamp_before_is_exclusive(self, client, products):
        data = _grid(
            client,
            sort={"predicate": "name"},
            search={"predicate_object": {"created_on": {"before": "2024-03-10T00:00:00"}}},
        ).get_json()

        assert [i["name"] for i in data["items"]] == ["Alpha", "Bravo"]

    def test_empty_grid(self, client):
        data = _grid(client).get_json()

        assert data == {"items": [], "total_record": 0, "number_of_pages": 0}

    @pytest.mark.parametrize(
        "body, field",
        [
            ({"sort": {"predicate": "price"}}, "sort.predicate"),
            ({"search": {"predicate_object": {"description": "x"}}}, "search.predicate_object.description"),
            ({"search": {"predicate_object": {"is_published": "maybe"}}}, "search.predicate_object.is_published"),
            ({"search": {"predicate_object": {"created_on": {"after": "yesterday"}}}},
             "search.predicate_object.created_on"),
            ({"pagination": {"start": -1}}, "pagination.start"),
            ({"pagination": {"number": 0}}, "pagination.number"),
            ({"pagination": {"number": 1000}}, "pagination.number"),
        ],
    )
    def test_invalid_parameters(self, client, products, body, field):
        resp = _grid(client, **body)

        assert resp.status_code == 400
        assert field in resp.get_json()


class TestSoftDelete:
    def test_delete_hides_product_from_grid(self, client, products):
        alpha = products[0]

        resp = client.post(f"/admin/products/{alpha.id}/delete")

        assert resp.status_code == 200
        assert db.session.get(Product, alpha.id).is_deleted is True
        names = [i["name"] for i in _grid(client).get_json()["items"]]
        assert "Alpha" not in names

    def test_delete_unknown_product(self, client):
        resp = client.post("/admin/products/999/delete")

        assert resp.status_code == 404
