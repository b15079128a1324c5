# catalog_admin/auth/__init__.py
from .login_routes import auth_bp
from .decorators import admin_required

__all__ = ["auth_bp", "admin_required"]
