# catalog_admin/models/media.py
from catalog_admin.extensions import db


class Media(db.Model):
    """Reference to a stored file; the bytes belong to the media service."""

    __tablename__ = "media"

    id = db.Column(db.Integer, primary_key=True)
    file_name = db.Column(db.String(255), nullable=False)
    media_type = db.Column(db.String(20), nullable=False, default="image")  # "image" | "video"

    def __repr__(self) -> str:
        return f"<Media {self.media_type} - {self.file_name}>"
