# catalog_admin/models/url_slug.py
from catalog_admin.extensions import db


class UrlSlug(db.Model):
    """Slug lookup shared by every sluggable entity type."""

    __tablename__ = "url_slug"

    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(450), unique=True, nullable=False)
    entity_id = db.Column(db.Integer, nullable=False)
    entity_type = db.Column(db.String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<UrlSlug {self.slug} -> {self.entity_type}#{self.entity_id}>"
