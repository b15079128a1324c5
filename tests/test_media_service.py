"""Tests for the file-backed media service."""
from __future__ import annotations

import io
import os

import pytest
from PIL import Image

from catalog_admin.extensions import media_service
from catalog_admin.models import Media
from catalog_admin.services.media_service import detect_media_type, is_image_stream


def test_save_media_writes_file_and_thumbnail(app, image_bytes):
    media_service.save_media(io.BytesIO(image_bytes("PNG", size=(1200, 600))), "big.png")

    assert os.path.isfile(media_service.media_path("big.png"))
    with Image.open(media_service.thumbnail_path("big.png")) as thumb:
        assert max(thumb.size) == app.config["THUMBNAIL_SIZE"]
        assert thumb.format == "PNG"


def test_thumbnail_keeps_source_format(app, image_bytes):
    # PNG bytes with alpha stored under a .jpg-looking name keep their real format
    media_service.save_media(io.BytesIO(image_bytes("PNG", mode="RGBA")), "alpha.jpg")

    with Image.open(media_service.thumbnail_path("alpha.jpg")) as thumb:
        assert thumb.format == "PNG"


def test_non_image_has_no_thumbnail(app):
    media_service.save_media(io.BytesIO(b"plain text"), "notes.txt")
    media = Media(file_name="notes.txt")

    assert os.path.isfile(media_service.media_path("notes.txt"))
    assert not os.path.exists(media_service.thumbnail_path("notes.txt"))
    assert media_service.get_thumbnail_url(media) == "/media/notes.txt"


def test_urls(app, image_bytes):
    media_service.save_media(io.BytesIO(image_bytes("JPEG")), "x.JPG")
    media = Media(file_name="x.JPG")

    assert media_service.get_media_url(media) == "/media/x.JPG"
    assert media_service.get_thumbnail_url(media) == "/media/thumbnails/x.JPG"
    assert media_service.get_thumbnail_url(None) is None


def test_delete_media_removes_both_files(app, image_bytes):
    media_service.save_media(io.BytesIO(image_bytes("PNG")), "gone.png")

    media_service.delete_media("gone.png")
    media_service.delete_media("never-existed.png")

    assert not os.path.exists(media_service.media_path("gone.png"))
    assert not os.path.exists(media_service.thumbnail_path("gone.png"))


@pytest.mark.parametrize(
    "filename, mimetype, expected",
    [
        ("a.png", "image/png", "image"),
        ("a.bin", "video/mp4", "video"),
        ("clip.MOV", None, "video"),
        ("photo.JPG", "application/octet-stream", "image"),
    ],
)
def test_detect_media_type(filename, mimetype, expected):
    assert detect_media_type(filename, mimetype) == expected


def test_oversized_image_is_stored_without_thumbnail(app, image_bytes, monkeypatch):
    # more than twice the pixel limit makes Pillow refuse to decode
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    media_service.save_media(io.BytesIO(image_bytes("PNG")), "huge.png")

    assert os.path.isfile(media_service.media_path("huge.png"))
    assert not os.path.exists(media_service.thumbnail_path("huge.png"))


def test_is_image_stream_rewinds(image_bytes):
    stream = io.BytesIO(image_bytes("JPEG"))

    assert is_image_stream(stream) is True
    assert stream.tell() == 0


@pytest.mark.parametrize("content", [b"hello world", b"", b"%PDF-1.4\n"])
def test_is_image_stream_rejects_other_bytes(content):
    stream = io.BytesIO(content)

    assert is_image_stream(stream) is False
    assert stream.tell() == 0
