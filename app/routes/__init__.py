from .auth import auth_bp
from .access import access_bp
from .admin import admin_bp
from .catalog import catalog_bp
from .orders import order_bp
from .reports import report_bp
from .uploads import uploads_bp


__all__ = [
    'auth_bp',
    'access_bp',
    'admin_bp',
    'catalog_bp',
    'order_bp',
    'report_bp',
    'uploads_bp',
]
