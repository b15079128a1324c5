# catalog_admin/admin/product_routes.py
import os
import re
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from flask import jsonify, request, current_app
from sqlalchemy.orm import selectinload

from . import admin_bp
from .product_form import bind_product_form, check_references
from catalog_admin.auth.decorators import admin_required
from catalog_admin.extensions import db, media_service
from catalog_admin.models import (
    Media,
    Product,
    ProductAttributeValue,
    ProductAttributeCombination,
    ProductCategory,
    ProductMedia,
    ProductVariation,
)
from catalog_admin.services import url_slug_service
from catalog_admin.services.media_service import detect_media_type
from catalog_admin.services.smart_table import (
    SmartTableError,
    SmartTableParam,
    to_smart_table_result,
)
from catalog_admin.utils.strings import parse_bool, to_url_friendly

PRODUCT_ENTITY_TYPE = "Product"

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]+$")


# ========================= Helpers =========================

def _money(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def _file_extension(original_name: str | None) -> str:
    ext = os.path.splitext(original_name or "")[1]
    return ext if _EXTENSION_RE.match(ext) else ""


def _save_file(fs, saved: list[str]) -> str:
    """
    Store an upload under ``<uuid4><original extension>`` and return that name.
    The client-supplied name never reaches the filesystem. The name goes into
    ``saved`` before the write so a partial file can still be removed.
    """
    file_name = f"{uuid.uuid4()}{_file_extension(fs.filename)}"
    saved.append(file_name)
    media_service.save_media(fs.stream, file_name)
    return file_name


def _group_attributes(attribute_values) -> list[dict]:
    """One entry per attribute in first-seen order, values deduplicated."""
    groups: dict[tuple, dict] = {}
    for av in attribute_values:
        name = av.attribute.name if av.attribute else None
        group = groups.setdefault(
            (av.attribute_id, name), {"id": av.attribute_id, "name": name, "values": []}
        )
        if av.value not in group["values"]:
            group["values"].append(av.value)
    return list(groups.values())


def _variation_dict(variation: ProductVariation) -> dict:
    return {
        "id": variation.id,
        "name": variation.name,
        "price_offset": _money(variation.price_offset),
        "attribute_combinations": [
            {
                "attribute_id": c.attribute_id,
                "attribute_name": c.attribute.name if c.attribute else None,
                "value": c.value,
            }
            for c in variation.attribute_combinations
        ],
    }


def _product_dict(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "slug": product.seo_title,
        "short_description": product.short_description,
        "description": product.description,
        "specification": product.specification,
        "price": _money(product.price),
        "old_price": _money(product.old_price),
        "is_published": bool(product.is_published),
        "category_ids": [pc.category_id for pc in product.categories],
        "thumbnail_image_url": media_service.get_thumbnail_url(product.thumbnail_image),
        "product_medias": [
            {"id": pm.id, "media_url": media_service.get_thumbnail_url(pm.media)}
            for pm in product.medias
        ],
        "attributes": _group_attributes(product.attribute_values),
        "variations": [_variation_dict(v) for v in product.variations],
    }


def _product_list_item(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "created_on": product.created_on.isoformat() if product.created_on else None,
        "is_published": bool(product.is_published),
    }


# --- grid filters ------------------------------------------------------------

def _filter_name(query, value):
    if not isinstance(value, str):
        raise ValueError("Must be a string.")
    text = value.strip()
    if not text:
        return query
    return query.filter(Product.name.ilike(f"%{text}%"))


def _filter_is_published(query, value):
    flag = parse_bool(value)
    if flag is None:
        raise ValueError("Must be a boolean.")
    return query.filter(Product.is_published.is_(flag))


def _parse_moment(raw, *, end_of_day: bool = False) -> datetime:
    """
    Parse an ISO 8601 date or timestamp into naive UTC.

    With ``end_of_day`` a date-only value resolves to the following midnight,
    so an exclusive bound on it still covers that whole day.
    """
    if not isinstance(raw, str):
        raise ValueError("Dates must be ISO 8601 strings.")
    text = raw.strip()
    try:
        day = date.fromisoformat(text)
    except ValueError:
        day = None
    if day is not None:
        moment = datetime(day.year, day.month, day.day)
        return moment + timedelta(days=1) if end_of_day else moment

    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError("Dates must be ISO 8601 strings.") from None
    # created_on is stored as naive UTC
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _filter_created_on(query, value):
    """
    ``after`` is inclusive. ``before`` is exclusive for a timestamp and
    inclusive of the whole day for a date.
    """
    if not isinstance(value, dict):
        raise ValueError("Must be an object with 'after' and/or 'before'.")
    unknown = set(value) - {"after", "before"}
    if unknown:
        raise ValueError("Only 'after' and 'before' are supported.")
    if value.get("after"):
        query = query.filter(Product.created_on >= _parse_moment(value["after"]))
    if value.get("before"):
        cutoff = _parse_moment(value["before"], end_of_day=True)
        query = query.filter(Product.created_on < cutoff)
    return query


PRODUCT_GRID_SORTABLE = {
    "id": Product.id,
    "name": Product.name,
    "created_on": Product.created_on,
    "is_published": Product.is_published,
}

PRODUCT_GRID_FILTERS = {
    "name": _filter_name,
    "is_published": _filter_is_published,
    "created_on": _filter_created_on,
}


# --- create mapping ----------------------------------------------------------

def _map_variations(form, product: Product) -> None:
    for variation_form in form.variations:
        variation = ProductVariation(
            name=variation_form.name,
            price_offset=variation_form.price_offset,
        )
        for combination_form in variation_form.attribute_combinations:
            variation.add_attribute_combination(
                ProductAttributeCombination(
                    attribute_id=combination_form.attribute_id,
                    value=combination_form.value,
                )
            )
        product.add_product_variation(variation)


def _save_product_images(form, product: Product, saved: list[str]) -> None:
    """Write thumbnail and gallery files and link them; stored names go into ``saved``."""
    if form.thumbnail_image is not None:
        file_name = _save_file(form.thumbnail_image, saved)
        product.thumbnail_image = Media(file_name=file_name, media_type="image")

    for fs in form.product_images:
        file_name = _save_file(fs, saved)
        media = Media(file_name=file_name, media_type=detect_media_type(fs.filename, fs.mimetype))
        product.add_media(ProductMedia(media=media))


# ========================= Endpoints =========================

@admin_bp.get("/products/<int:product_id>")
@admin_required
def get_product(product_id: int):
    product = (
        Product.query.options(
            selectinload(Product.thumbnail_image),
            selectinload(Product.medias),
            selectinload(Product.attribute_values),
            selectinload(Product.categories),
            selectinload(Product.variations).selectinload(ProductVariation.attribute_combinations),
        )
        .filter(Product.id == product_id)
        .first()
    )
    if product is None:
        return jsonify({"error": "Product not found"}), 404
    return jsonify(_product_dict(product)), 200


@admin_bp.post("/products/grid")
@admin_required
def list_products():
    try:
        param = SmartTableParam.from_payload(
            request.get_json(silent=True),
            max_page_size=current_app.config["SMART_TABLE_MAX_PAGE_SIZE"],
        )
        query = Product.query.filter(Product.is_deleted.is_(False))
        grid = to_smart_table_result(
            query,
            param,
            _product_list_item,
            sortable=PRODUCT_GRID_SORTABLE,
            filters=PRODUCT_GRID_FILTERS,
            default_sort=Product.id.desc(),
            tiebreaker=Product.id.desc(),
        )
    except SmartTableError as exc:
        current_app.logger.info("Rejected product grid request: %s", exc)
        return jsonify(exc.errors), 400
    return jsonify(grid), 200


@admin_bp.post("/products")
@admin_required
def create_product():
    form, errors = bind_product_form()
    if form is not None:
        errors = check_references(form)
    if errors:
        current_app.logger.info("Rejected product form: %s", ", ".join(sorted(errors)))
        return jsonify(errors), 400

    product = Product(
        name=form.name,
        seo_title=url_slug_service.unique_slug(to_url_friendly(form.name)),
        short_description=form.short_description,
        description=form.description,
        specification=form.specification,
        price=form.price,
        old_price=form.old_price,
        is_published=form.is_published,
    )

    for attribute in form.attributes:
        for value in attribute.values:
            product.add_attribute_value(
                ProductAttributeValue(attribute_id=attribute.id, value=value)
            )

    _map_variations(form, product)

    for category_id in form.category_ids:
        product.add_category(ProductCategory(category_id=category_id))

    saved_files: list[str] = []
    try:
        _save_product_images(form, product, saved_files)
        db.session.add(product)
        db.session.commit()
    except Exception:
        db.session.rollback()
        if current_app.config.get("MEDIA_CLEANUP_ON_FAILURE", True):
            for file_name in saved_files:
                media_service.delete_media(file_name)
        current_app.logger.error(
            "Saving product %r failed; %d stored file(s) affected", form.name, len(saved_files)
        )
        raise

    url_slug_service.add(product.seo_title, product.id, PRODUCT_ENTITY_TYPE)
    db.session.commit()

    current_app.logger.info("Created product #%s (%s)", product.id, product.seo_title)
    return "", 200


@admin_bp.post("/products/<int:product_id>/delete")
@admin_required
def delete_product(product_id: int):
    product = db.session.get(Product, product_id)
    if product is None:
        return jsonify({"error": "Product not found"}), 404

    product.is_deleted = True
    db.session.commit()
    current_app.logger.info("Soft-deleted product #%s", product.id)
    return jsonify({"message": "Deleted"}), 200
