# catalog_admin/auth/login_routes.py
from flask import Blueprint, jsonify, request, current_app
from flask_login import login_user, logout_user

from catalog_admin.models.user import User

auth_bp = Blueprint("auth", __name__, url_prefix="/admin")


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or request.form or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    user = User.query.filter_by(username=username).first()
    if user and user.check_password(password):
        login_user(user)
        current_app.logger.info("User %s logged in", user.username)
        return jsonify({"id": user.id, "username": user.username, "is_admin": bool(user.is_admin)}), 200

    current_app.logger.info("Failed login for %r", username)
    return jsonify({"error": "Invalid credentials"}), 401


@auth_bp.post("/logout")
def logout():
    logout_user()
    return "", 204
