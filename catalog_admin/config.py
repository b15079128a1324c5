# catalog_admin/config.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(BASE_DIR, ".env"))

INSTANCE_DIR = os.path.join(BASE_DIR, "instance")


def _env(key: str, default=None):
    v = os.getenv(key)
    return v if v not in (None, "", "None") else default


def _env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v in (None, "", "None"):
        return default
    return str(v).strip().lower() in ("1", "true", "t", "yes", "y", "on")


def _env_list(key: str, default: str = "") -> list[str]:
    raw = _env(key, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _resolve_sqlite_uri(db_url: str | None) -> str:
    if not db_url:
        db_path = os.path.join(INSTANCE_DIR, "catalog.db")
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    if db_url.startswith("sqlite:///"):
        raw_path = db_url.replace("sqlite:///", "", 1)
        if not os.path.isabs(raw_path):
            raw_path = os.path.join(BASE_DIR, raw_path)
        db_path = os.path.normpath(raw_path)
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return "sqlite:///" + db_path.replace("\\", "/")

    return db_url


class Config:
    SECRET_KEY = _env("SECRET_KEY", "dev-please-change-me")
    LOG_LEVEL = _env("LOG_LEVEL", "INFO")

    SQLALCHEMY_DATABASE_URI = _resolve_sqlite_uri(_env("DATABASE_URL"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Media storage
    UPLOAD_FOLDER = _env("UPLOAD_FOLDER", os.path.join(BASE_DIR, "static", "uploads"))
    MEDIA_URL_PREFIX = _env("MEDIA_URL_PREFIX", "/media")
    THUMBNAIL_SIZE = int(_env("THUMBNAIL_SIZE", 300))
    MAX_CONTENT_LENGTH = int(_env("MAX_CONTENT_LENGTH", 32 * 1024 * 1024))
    # Remove files written for a product whose first commit failed
    MEDIA_CLEANUP_ON_FAILURE = _env_bool("MEDIA_CLEANUP_ON_FAILURE", True)

    SMART_TABLE_MAX_PAGE_SIZE = int(_env("SMART_TABLE_MAX_PAGE_SIZE", 100))

    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    BCRYPT_LOG_ROUNDS = int(_env("BCRYPT_LOG_ROUNDS", 12))
