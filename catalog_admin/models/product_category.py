from catalog_admin.extensions import db


class ProductCategory(db.Model):
    __tablename__ = "product_category"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False
    )
    category_id = db.Column(db.Integer, db.ForeignKey("category.id"), nullable=False)

    product = db.relationship("Product", back_populates="categories")
    category = db.relationship("Category")

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"<ProductCategory product={self.product_id} category={self.category_id}>"
