from flask import Blueprint

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

# Importing the modules attaches their views to admin_bp
from . import product_routes  # noqa: E402,F401
