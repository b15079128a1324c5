from catalog_admin.extensions import db


class ProductVariation(db.Model):
    __tablename__ = "product_variation"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer, db.ForeignKey("product.id", ondelete="CASCADE"), nullable=False
    )
    name = db.Column(db.String(450), nullable=False)
    price_offset = db.Column(db.Numeric(18, 2), nullable=False, default=0)

    product = db.relationship("Product", back_populates="variations")
    attribute_combinations = db.relationship(
        "ProductAttributeCombination",
        back_populates="variation",
        order_by="ProductAttributeCombination.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def add_attribute_combination(self, combination: "ProductAttributeCombination") -> None:
        if combination not in self.attribute_combinations:
            self.attribute_combinations.append(combination)
        combination.variation = self

    def __repr__(self) -> str:  # pragma: no cover - debug aid
        return f"<ProductVariation {self.name}>"


class ProductAttributeCombination(db.Model):
    __tablename__ = "product_attribute_combination"

    id = db.Column(db.Integer, primary_key=True)
    variation_id = db.Column(
        db.Integer, db.ForeignKey("product_variation.id", ondelete="CASCADE"), nullable=False
    )
    attribute_id = db.Column(db.Integer, db.ForeignKey("product_attribute.id"), nullable=False)
    value = db.Column(db.String(450), nullable=False)

    variation = db.relationship(ProductVariation, back_populates="attribute_combinations")
    attribute = db.relationship("ProductAttribute", lazy="joined")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ProductAttributeCombination {self.attribute_id}={self.value}>"
