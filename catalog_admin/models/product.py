# catalog_admin/models/product.py
from datetime import datetime

from catalog_admin.extensions import db


class Product(db.Model):
    """
    Product aggregate root.

    Children are attached through the ``add_*`` methods, which append the
    child once and point its ``product`` back at this instance.
    """

    __tablename__ = "product"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(450), nullable=False)
    seo_title = db.Column(db.String(450), nullable=True, index=True)
    short_description = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)
    specification = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(18, 2), nullable=False)
    old_price = db.Column(db.Numeric(18, 2), nullable=True)
    is_published = db.Column(db.Boolean, nullable=False, default=False)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)

    thumbnail_image_id = db.Column(db.Integer, db.ForeignKey("media.id"), nullable=True)
    thumbnail_image = db.relationship("Media", foreign_keys=[thumbnail_image_id])

    attribute_values = db.relationship(
        "ProductAttributeValue",
        back_populates="product",
        order_by="ProductAttributeValue.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    medias = db.relationship(
        "ProductMedia",
        back_populates="product",
        order_by="ProductMedia.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    variations = db.relationship(
        "ProductVariation",
        back_populates="product",
        order_by="ProductVariation.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    categories = db.relationship(
        "ProductCategory",
        back_populates="product",
        order_by="ProductCategory.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    created_on = db.Column(db.DateTime, default=datetime.utcnow)
    updated_on = db.Column(
        db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # --- aggregate operations ----------------------------------------------

    def add_attribute_value(self, attribute_value) -> None:
        if attribute_value not in self.attribute_values:
            self.attribute_values.append(attribute_value)
        attribute_value.product = self

    def add_media(self, product_media) -> None:
        if product_media not in self.medias:
            self.medias.append(product_media)
        product_media.product = self

    def add_product_variation(self, variation) -> None:
        if variation not in self.variations:
            self.variations.append(variation)
        variation.product = self

    def add_category(self, product_category) -> None:
        if product_category not in self.categories:
            self.categories.append(product_category)
        product_category.product = self

    def __repr__(self) -> str:
        return f"<Product {self.name}>"
