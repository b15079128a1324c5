"""Pytest configuration for test suite."""
from __future__ import annotations

import io

import pytest
from PIL import Image

from catalog_admin.app import create_app
from catalog_admin.extensions import db
from catalog_admin.models import Category, ProductAttribute


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "LOGIN_DISABLED": True,
            "BCRYPT_LOG_ROUNDS": 4,
        }
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(app):
    """Attributes and categories the create form can reference."""
    color = ProductAttribute(id=1, name="Color")
    size = ProductAttribute(id=2, name="Size")
    categories = [
        Category(id=5, name="Shirts", slug="shirts"),
        Category(id=7, name="Summer", slug="summer"),
    ]
    db.session.add_all([color, size, *categories])
    db.session.commit()
    return {"color": color, "size": size, "categories": categories}


def make_image(fmt: str = "PNG", size=(640, 480), mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, (200, 30, 30)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def image_bytes():
    return make_image
