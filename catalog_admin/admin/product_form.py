# catalog_admin/admin/product_form.py
"""
Binding and validation of the product create form.

Errors are collected as ``{"field.path": "message"}``; a form is usable only
when that mapping is empty.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from flask import request
from werkzeug.datastructures import FileStorage

from catalog_admin.models import Category, ProductAttribute
from catalog_admin.services.media_service import detect_media_type, is_image_stream
from catalog_admin.utils.strings import parse_bool

NAME_MAX_LENGTH = 450
VALUE_MAX_LENGTH = 450


@dataclass
class AttributeCombinationForm:
    attribute_id: int
    value: str


@dataclass
class VariationForm:
    name: str
    price_offset: Decimal
    attribute_combinations: list[AttributeCombinationForm] = field(default_factory=list)


@dataclass
class AttributeForm:
    id: int
    values: list[str] = field(default_factory=list)


@dataclass
class ProductForm:
    name: str
    price: Decimal
    old_price: Decimal | None = None
    short_description: str | None = None
    description: str | None = None
    specification: str | None = None
    is_published: bool = False
    attributes: list[AttributeForm] = field(default_factory=list)
    variations: list[VariationForm] = field(default_factory=list)
    category_ids: list[int] = field(default_factory=list)
    # position of each category id in the submitted list
    category_id_indexes: list[int] = field(default_factory=list)
    thumbnail_image: FileStorage | None = None
    product_images: list[FileStorage] = field(default_factory=list)


# ============================== Helpers ==============================

def _text(val) -> str | None:
    if val is None:
        return None
    s = str(val).strip()
    return s or None


def _to_decimal(val):
    """Return (Decimal | None, error message | None)."""
    if val is None or (isinstance(val, str) and not val.strip()):
        return None, None
    if isinstance(val, bool):
        return None, "Must be a number."
    try:
        dec = Decimal(str(val).strip())
    except InvalidOperation:
        return None, "Must be a number."
    if not dec.is_finite():
        return None, "Must be a number."
    return dec, None


def _to_positive_int(val):
    if isinstance(val, bool):
        return None
    try:
        i = int(val)
    except (TypeError, ValueError):
        return None
    if isinstance(val, float) and val != i:
        return None
    return i if i > 0 else None


def _as_list(val, key: str, errors: dict) -> list:
    if val is None:
        return []
    if not isinstance(val, list):
        errors[key] = "Must be a list."
        return []
    return val


def _has_file(fs) -> bool:
    return bool(fs and getattr(fs, "filename", None))


# ========================= Binding =========================

def _read_payload(errors: dict):
    is_multipart = (request.content_type or "").lower().startswith("multipart/form-data")
    if is_multipart or request.form:
        raw = request.form.get("product")
        if raw is None:
            errors["product"] = "A product payload is required."
            return None
        try:
            payload = json.loads(raw)
        except ValueError:
            errors["product"] = "Invalid JSON."
            return None
    else:
        body = request.get_json(silent=True)
        if body is None:
            errors["product"] = "A product payload is required."
            return None
        payload = body.get("product", body) if isinstance(body, dict) else body

    if not isinstance(payload, dict):
        errors["product"] = "Must be an object."
        return None
    return payload


def _bind_attributes(raw_list, errors: dict) -> list[AttributeForm]:
    attributes = []
    for i, raw in enumerate(_as_list(raw_list, "product.attributes", errors)):
        key = f"product.attributes[{i}]"
        if not isinstance(raw, dict):
            errors[key] = "Must be an object."
            continue
        attribute_id = _to_positive_int(raw.get("id"))
        if attribute_id is None:
            errors[f"{key}.id"] = "A valid attribute id is required."
        values = []
        for j, raw_value in enumerate(_as_list(raw.get("values"), f"{key}.values", errors)):
            value = _text(raw_value) if isinstance(raw_value, (str, int, float)) else None
            if value is None:
                errors[f"{key}.values[{j}]"] = "Value is required."
            elif len(value) > VALUE_MAX_LENGTH:
                errors[f"{key}.values[{j}]"] = f"Must be at most {VALUE_MAX_LENGTH} characters."
            else:
                values.append(value)
        if attribute_id is not None:
            attributes.append(AttributeForm(id=attribute_id, values=values))
    return attributes


def _bind_variations(raw_list, errors: dict) -> list[VariationForm]:
    variations = []
    for i, raw in enumerate(_as_list(raw_list, "product.variations", errors)):
        key = f"product.variations[{i}]"
        if not isinstance(raw, dict):
            errors[key] = "Must be an object."
            continue
        name = _text(raw.get("name"))
        if name is None:
            errors[f"{key}.name"] = "Name is required."
        elif len(name) > NAME_MAX_LENGTH:
            errors[f"{key}.name"] = f"Must be at most {NAME_MAX_LENGTH} characters."
        price_offset, err = _to_decimal(raw.get("price_offset"))
        if err:
            errors[f"{key}.price_offset"] = err

        combinations = []
        raw_combinations = _as_list(
            raw.get("attribute_combinations"), f"{key}.attribute_combinations", errors
        )
        for k, raw_comb in enumerate(raw_combinations):
            ckey = f"{key}.attribute_combinations[{k}]"
            if not isinstance(raw_comb, dict):
                errors[ckey] = "Must be an object."
                continue
            attribute_id = _to_positive_int(raw_comb.get("attribute_id"))
            if attribute_id is None:
                errors[f"{ckey}.attribute_id"] = "A valid attribute id is required."
            raw_value = raw_comb.get("value")
            value = _text(raw_value) if isinstance(raw_value, (str, int, float)) else None
            if value is None:
                errors[f"{ckey}.value"] = "Value is required."
            if attribute_id is not None and value is not None:
                combinations.append(AttributeCombinationForm(attribute_id=attribute_id, value=value))

        variations.append(
            VariationForm(
                name=name or "",
                price_offset=price_offset if price_offset is not None else Decimal("0"),
                attribute_combinations=combinations,
            )
        )
    return variations


def _bind_category_ids(raw_list, errors: dict) -> tuple[list[int], list[int]]:
    """Return the distinct ids and the index each was first submitted at."""
    category_ids: list[int] = []
    indexes: list[int] = []
    for i, raw in enumerate(_as_list(raw_list, "product.category_ids", errors)):
        category_id = _to_positive_int(raw)
        if category_id is None:
            errors[f"product.category_ids[{i}]"] = "A valid category id is required."
        elif category_id not in category_ids:
            category_ids.append(category_id)
            indexes.append(i)
    return category_ids, indexes


def _bind_files(errors: dict) -> tuple[FileStorage | None, list[FileStorage]]:
    thumbnail = request.files.get("thumbnail_image")
    if not _has_file(thumbnail):
        thumbnail = None
    elif (
        detect_media_type(thumbnail.filename, thumbnail.mimetype) != "image"
        or not is_image_stream(thumbnail.stream)
    ):
        errors["thumbnail_image"] = "Thumbnail must be an image."

    # product_images, product_images[0], product_images[1], ...
    images = []
    for key in request.files:
        if not key.startswith("product_images"):
            continue
        images.extend(fs for fs in request.files.getlist(key) if _has_file(fs))
    return thumbnail, images


def bind_product_form() -> tuple[ProductForm | None, dict[str, str]]:
    """Read the current request into a :class:`ProductForm`."""
    errors: dict[str, str] = {}
    payload = _read_payload(errors)
    thumbnail, images = _bind_files(errors)
    if payload is None:
        return None, errors

    name = _text(payload.get("name"))
    if name is None:
        errors["product.name"] = "Name is required."
    elif len(name) > NAME_MAX_LENGTH:
        errors["product.name"] = f"Must be at most {NAME_MAX_LENGTH} characters."

    price, err = _to_decimal(payload.get("price"))
    if err:
        errors["product.price"] = err
    elif price is None:
        errors["product.price"] = "Price is required."
    elif price < 0:
        errors["product.price"] = "Must not be negative."

    old_price, err = _to_decimal(payload.get("old_price"))
    if err:
        errors["product.old_price"] = err
    elif old_price is not None and old_price < 0:
        errors["product.old_price"] = "Must not be negative."

    try:
        is_published = parse_bool(payload.get("is_published"), False)
    except ValueError as exc:
        errors["product.is_published"] = str(exc)
        is_published = False

    category_ids, category_id_indexes = _bind_category_ids(payload.get("category_ids"), errors)

    form = ProductForm(
        name=name or "",
        price=price if price is not None else Decimal("0"),
        old_price=old_price,
        short_description=_text(payload.get("short_description")),
        description=_text(payload.get("description")),
        specification=_text(payload.get("specification")),
        is_published=is_published,
        attributes=_bind_attributes(payload.get("attributes"), errors),
        variations=_bind_variations(payload.get("variations"), errors),
        category_ids=category_ids,
        category_id_indexes=category_id_indexes,
        thumbnail_image=thumbnail,
        product_images=images,
    )
    if errors:
        return None, errors
    return form, errors


def check_references(form: ProductForm) -> dict[str, str]:
    """Report attribute and category ids that do not exist."""
    errors: dict[str, str] = {}

    attribute_ids = {a.id for a in form.attributes}
    for variation in form.variations:
        attribute_ids.update(c.attribute_id for c in variation.attribute_combinations)
    known_attributes = set()
    if attribute_ids:
        rows = ProductAttribute.query.filter(ProductAttribute.id.in_(attribute_ids)).all()
        known_attributes = {a.id for a in rows}

    for i, attribute in enumerate(form.attributes):
        if attribute.id not in known_attributes:
            errors[f"product.attributes[{i}].id"] = "Unknown attribute."
    for i, variation in enumerate(form.variations):
        for k, combination in enumerate(variation.attribute_combinations):
            if combination.attribute_id not in known_attributes:
                errors[f"product.variations[{i}].attribute_combinations[{k}].attribute_id"] = (
                    "Unknown attribute."
                )

    if form.category_ids:
        rows = Category.query.filter(Category.id.in_(form.category_ids)).all()
        known_categories = {c.id for c in rows}
        for i, category_id in zip(form.category_id_indexes, form.category_ids):
            if category_id not in known_categories:
                errors[f"product.category_ids[{i}]"] = "Unknown category."

    return errors
