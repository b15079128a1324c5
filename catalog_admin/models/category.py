from catalog_admin.extensions import db


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(150), unique=True, nullable=True)
    description = db.Column(db.Text, nullable=True)

    def __repr__(self): return f"<Category {self.name}>"
