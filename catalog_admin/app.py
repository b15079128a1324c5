# catalog_admin/app.py
import logging

from flask import Flask, send_from_directory
from catalog_admin.config import Config

# Extensions
from catalog_admin.extensions import db, login_manager, bcrypt, migrate, cors, media_service

# Blueprints
from catalog_admin.admin import admin_bp
from catalog_admin.auth import auth_bp
from catalog_admin.cli import create_admin
from catalog_admin import models as _models  # noqa: F401


def create_app(test_config=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.json.ensure_ascii = False

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    media_service.init_app(app)

    cors.init_app(
        app,
        resources={
            r"/admin/*": {
                "origins": app.config["CORS_ORIGINS"],
                "supports_credentials": True,
            }
        },
    )

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)

    app.cli.add_command(create_admin)

    media_prefix = app.config["MEDIA_URL_PREFIX"].rstrip("/")

    @app.get(f"{media_prefix}/<path:filename>", endpoint="media")
    def media(filename):
        return send_from_directory(app.config["UPLOAD_FOLDER"], filename)

    # Diagnostics: list all routes
    @app.get("/__routes")
    def __routes():
        lines = []
        for r in sorted(app.url_map.iter_rules(), key=lambda x: x.rule):
            methods = ",".join(
                sorted(m for m in r.methods if m in {"GET", "POST", "PUT", "DELETE", "PATCH"})
            )
            lines.append(f"{r.rule:35s} -> {r.endpoint} [{methods}]")
        return "<pre>" + "\n".join(lines) + "</pre>"

    return app
