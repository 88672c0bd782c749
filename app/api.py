from app.routes import (
    auth_bp,
    access_bp,
    admin_bp,
    catalog_bp,
    order_bp,
    report_bp,
    uploads_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(access_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(report_bp)
    app.register_blueprint(uploads_bp)
