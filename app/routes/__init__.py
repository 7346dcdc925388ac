from .shops import shops_bp
from .products import products_bp
from .home import home_bp
from .inventory import inventory_bp
from .master import master_bp
from .shopping_list import shopping_list_bp
from .scan import scan_bp
from .changes import changes_bp


__all__ = [
    'shops_bp',
    'products_bp',
    'home_bp',
    'inventory_bp',
    'master_bp',
    'shopping_list_bp',
    'scan_bp',
    'changes_bp',
]
