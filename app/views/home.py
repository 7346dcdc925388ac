from app.services import cart as cart_service
from app.services import products as product_service
from app.services import shops as shop_service
from app.services.search import group_by_name, search_products
from app.views.base import ScreenState


class HomeScreen(ScreenState):
    """Search box plus per-name unit price comparison."""

    tables = ("shopping_list", "shops")

    def __init__(self, search="", client=None):
        super().__init__(client)
        self.search = search or ""
        self.products = []
        self.shop_names = {}

    def load(self):
        self.products = product_service.list_products()
        self.shop_names = shop_service.shop_name_map()

    def groups(self):
        matched = search_products(self.products, self.search)
        return group_by_name(
            matched, lambda shop_id: shop_service.resolve_shop_name(self.shop_names, shop_id)
        )

    def render(self):
        groups = self.groups()
        return {
            "search": self.search,
            "groups": groups,
            "not_found": bool(self.search.strip()) and not groups,
        }

    def add_to_list(self, product_id):
        product = product_service.get_product(product_id)
        return cart_service.add_to_cart(product)
