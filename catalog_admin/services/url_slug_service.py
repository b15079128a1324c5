# catalog_admin/services/url_slug_service.py
from __future__ import annotations

from catalog_admin.extensions import db
from catalog_admin.models import UrlSlug


def unique_slug(base: str) -> str:
    """Return ``base`` or the first ``base-N`` (N >= 2) not yet registered."""
    candidate = base
    suffix = 1
    while UrlSlug.query.filter(UrlSlug.slug == candidate).first():
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def add(slug: str, entity_id: int, entity_type: str) -> UrlSlug:
    """Stage a slug mapping; the caller commits."""
    url_slug = UrlSlug(slug=slug, entity_id=entity_id, entity_type=entity_type)
    db.session.add(url_slug)
    return url_slug
