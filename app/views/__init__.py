from .base import ScreenState, mounted
from .home import HomeScreen
from .inventory import InventoryScreen
from .master import MasterScreen
from .product_form import ProductFormScreen
from .shops import ShopRegistryScreen
from .shopping_list import ShoppingListScreen

__all__ = [
    'ScreenState',
    'mounted',
    'HomeScreen',
    'InventoryScreen',
    'MasterScreen',
    'ProductFormScreen',
    'ShopRegistryScreen',
    'ShoppingListScreen',
]
