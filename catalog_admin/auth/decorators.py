from functools import wraps

from flask import current_app, jsonify
from flask_login import current_user, login_required


def admin_required(view):
    """login_required plus the ``is_admin`` flag; both skipped under LOGIN_DISABLED."""

    @wraps(view)
    @login_required
    def wrapped(*args, **kwargs):
        if not current_app.config.get("LOGIN_DISABLED") and not getattr(current_user, "is_admin", False):
            return jsonify({"error": "Admin role required"}), 403
        return view(*args, **kwargs)

    return wrapped
