# catalog_admin/services/media_service.py
from __future__ import annotations

import os
import shutil

from flask import current_app

from PIL import Image, ImageOps

THUMBNAIL_DIR = "thumbnails"
VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".mkv", ".webm", ".m4v"}


def detect_media_type(filename: str, mimetype: str | None) -> str:
    """Return 'video' or 'image'."""
    mt = (mimetype or "").lower()
    if mt.startswith("video/"):
        return "video"
    if mt.startswith("image/"):
        return "image"
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in VIDEO_EXTENSIONS:
        return "video"
    return "image"


def is_image_stream(stream) -> bool:
    """True when Pillow can identify ``stream`` as an image; the stream is rewound."""
    try:
        with Image.open(stream) as img:
            img.verify()
        return True
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return False
    finally:
        stream.seek(0)


class MediaService:
    """
    File storage for uploaded media.

    Files live flat under ``UPLOAD_FOLDER``; images Pillow can decode also
    get a bounded thumbnail under ``UPLOAD_FOLDER/thumbnails`` with the same
    file name. URLs are built from ``MEDIA_URL_PREFIX``.
    """

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        app.config.setdefault("MEDIA_URL_PREFIX", "/media")
        app.config.setdefault("THUMBNAIL_SIZE", 300)
        os.makedirs(os.path.join(app.config["UPLOAD_FOLDER"], THUMBNAIL_DIR), exist_ok=True)
        app.extensions["media_service"] = self

    # --- paths ---------------------------------------------------------------

    def _upload_dir(self) -> str:
        return current_app.config["UPLOAD_FOLDER"]

    def media_path(self, file_name: str) -> str:
        return os.path.join(self._upload_dir(), file_name)

    def thumbnail_path(self, file_name: str) -> str:
        return os.path.join(self._upload_dir(), THUMBNAIL_DIR, file_name)

    # --- storage -------------------------------------------------------------

    def save_media(self, stream, file_name: str) -> None:
        path = self.media_path(file_name)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as out:
            shutil.copyfileobj(stream, out)
        current_app.logger.info("Stored media %s", file_name)
        self._make_thumbnail(path, file_name)

    def _make_thumbnail(self, source_path: str, file_name: str) -> None:
        size = int(current_app.config["THUMBNAIL_SIZE"])
        try:
            with Image.open(source_path) as src:
                fmt = src.format
                img = ImageOps.exif_transpose(src)
                if img.mode not in ("RGB", "RGBA"):
                    img = img.convert("RGB")
                img.thumbnail((size, size), Image.Resampling.LANCZOS)

                out_path = self.thumbnail_path(file_name)
                os.makedirs(os.path.dirname(out_path), exist_ok=True)
                img.save(out_path, format=fmt)
        except (OSError, ValueError, Image.DecompressionBombError):
            # Not an image Pillow will decode (videos, documents, oversized): no thumbnail
            current_app.logger.info("No thumbnail generated for %s", file_name)

    def delete_media(self, file_name: str) -> None:
        for path in (self.media_path(file_name), self.thumbnail_path(file_name)):
            try:
                if os.path.exists(path):
                    os.remove(path)
            except OSError:
                current_app.logger.exception("Failed to remove media file %s", path)

    # --- urls ----------------------------------------------------------------

    def _url(self, *parts: str) -> str:
        prefix = current_app.config["MEDIA_URL_PREFIX"].rstrip("/")
        return "/".join([prefix, *parts])

    def get_media_url(self, media) -> str | None:
        if media is None or not media.file_name:
            return None
        return self._url(media.file_name)

    def get_thumbnail_url(self, media) -> str | None:
        if media is None or not media.file_name:
            return None
        if os.path.exists(self.thumbnail_path(media.file_name)):
            return self._url(THUMBNAIL_DIR, media.file_name)
        return self.get_media_url(media)
