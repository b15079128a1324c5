# catalog_admin/extensions.py
from __future__ import annotations

from flask import jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_cors import CORS

from catalog_admin.services.media_service import MediaService

# Keep extension instances in one place to avoid circular imports
db = SQLAlchemy()
login_manager = LoginManager()
bcrypt = Bcrypt()
migrate = Migrate()
cors = CORS()
media_service = MediaService()


@login_manager.user_loader
def load_user(user_id):
    # Lazy import to avoid circular dependency when loading the model
    from catalog_admin.models.user import User
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"error": "Authentication required"}), 401
