# catalog_admin/services/smart_table.py
"""
Paging, sorting and filtering for admin grids.

Request body (smart-table layout)::

    {
      "pagination": {"start": 0, "number": 10},
      "sort": {"predicate": "name", "reverse": false},
      "search": {"predicate_object": {"name": "shirt"}}
    }

``start`` is a record offset and ``number`` the page size. Each grid
endpoint passes the columns it allows sorting on and the filter functions
it allows; anything else is rejected with :class:`SmartTableError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable

DEFAULT_PAGE_SIZE = 10


class SmartTableError(ValueError):
    """Invalid grid parameters; ``errors`` maps field -> message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def _to_int(val, default=None):
    if isinstance(val, bool):
        return default
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


@dataclass
class SmartTableParam:
    start: int = 0
    number: int = DEFAULT_PAGE_SIZE
    sort_predicate: str | None = None
    sort_reverse: bool = False
    filters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload, max_page_size: int = 100) -> "SmartTableParam":
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise SmartTableError({"": "Grid parameters must be a JSON object."})

        errors: dict[str, str] = {}
        pagination = payload.get("pagination") or {}
        sort = payload.get("sort") or {}
        search = payload.get("search") or {}
        if not isinstance(pagination, dict):
            errors["pagination"] = "Must be an object."
            pagination = {}
        if not isinstance(sort, dict):
            errors["sort"] = "Must be an object."
            sort = {}
        if not isinstance(search, dict):
            errors["search"] = "Must be an object."
            search = {}

        start = _to_int(pagination.get("start", 0))
        if start is None or start < 0:
            errors["pagination.start"] = "Must be a non-negative integer."
        number = _to_int(pagination.get("number", DEFAULT_PAGE_SIZE))
        if number is None or number < 1:
            errors["pagination.number"] = "Must be a positive integer."
        elif number > max_page_size:
            errors["pagination.number"] = f"Must not exceed {max_page_size}."

        predicate = sort.get("predicate")
        if predicate is not None and not isinstance(predicate, str):
            errors["sort.predicate"] = "Must be a string."

        filters = search.get("predicate_object") or {}
        if not isinstance(filters, dict):
            errors["search.predicate_object"] = "Must be an object."
            filters = {}

        if errors:
            raise SmartTableError(errors)

        return cls(
            start=start,
            number=number,
            sort_predicate=predicate or None,
            sort_reverse=bool(sort.get("reverse")),
            filters=filters,
        )


def to_smart_table_result(
    query,
    param: SmartTableParam,
    projector: Callable[[Any], dict],
    *,
    sortable: dict[str, Any],
    filters: dict[str, Callable[[Any, Any], Any]],
    default_sort,
    tiebreaker=None,
) -> dict:
    """
    Apply ``param`` to a SQLAlchemy query and project one page.

    ``filters`` maps a filter name to ``fn(query, value) -> query``; a filter
    function raises ``ValueError`` for values it cannot use.
    """
    errors: dict[str, str] = {}
    for name, value in param.filters.items():
        apply_filter = filters.get(name)
        if apply_filter is None:
            errors[f"search.predicate_object.{name}"] = "Unknown filter field."
            continue
        try:
            query = apply_filter(query, value)
        except ValueError as exc:
            errors[f"search.predicate_object.{name}"] = str(exc)

    if param.sort_predicate is None:
        order = [default_sort]
    else:
        column = sortable.get(param.sort_predicate)
        if column is None:
            errors["sort.predicate"] = "Unknown sort field."
            order = []
        else:
            order = [column.desc() if param.sort_reverse else column.asc()]
            if tiebreaker is not None:
                order.append(tiebreaker)

    if errors:
        raise SmartTableError(errors)

    total = query.count()
    rows = query.order_by(*order).offset(param.start).limit(param.number).all()
    return {
        "items": [projector(row) for row in rows],
        "total_record": total,
        "number_of_pages": ceil(total / param.number) if total else 0,
    }
