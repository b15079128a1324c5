from catalog_admin.extensions import db


class ProductAttribute(db.Model):
    __tablename__ = "product_attribute"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(450), nullable=False)

    def __repr__(self) -> str:
        return f"<ProductAttribute {self.name}>"
