# catalog_admin/models/product_media.py
from catalog_admin.extensions import db


class ProductMedia(db.Model):
    __tablename__ = "product_media"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False
    )
    media_id = db.Column(db.Integer, db.ForeignKey("media.id"), nullable=False)

    product = db.relationship("Product", back_populates="medias")
    media = db.relationship("Media", lazy="joined")

    def __repr__(self) -> str:
        return f"<ProductMedia product={self.product_id} media={self.media_id}>"
