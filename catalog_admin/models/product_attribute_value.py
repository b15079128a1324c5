from catalog_admin.extensions import db


class ProductAttributeValue(db.Model):
    __tablename__ = "product_attribute_value"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False
    )
    attribute_id = db.Column(db.Integer, db.ForeignKey("product_attribute.id"), nullable=False)
    value = db.Column(db.String(450), nullable=False)

    product = db.relationship("Product", back_populates="attribute_values")
    attribute = db.relationship("ProductAttribute", lazy="joined")

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"<ProductAttributeValue {self.attribute_id}={self.value}>"
