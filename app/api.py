from app.routes import (
    shops_bp,
    products_bp,
    home_bp,
    inventory_bp,
    master_bp,
    shopping_list_bp,
    scan_bp,
    changes_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(shops_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(home_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(master_bp)
    app.register_blueprint(shopping_list_bp)
    app.register_blueprint(scan_bp)
    app.register_blueprint(changes_bp)
