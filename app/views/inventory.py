from app.errors import ConfirmationRequired
from app.services import cart as cart_service
from app.services import products as product_service
from app.services import shops as shop_service
from app.views.base import ScreenState


class InventoryScreen(ScreenState):
    tables = ("shopping_list", "shops")

    def __init__(self, visible_only=True, collapse=False, client=None):
        super().__init__(client)
        self.visible_only = visible_only
        self.collapse = collapse
        self.products = []
        self.shop_names = {}

    def load(self):
        products = product_service.list_products(visible_only=self.visible_only)
        if self.collapse:
            products = product_service.collapse_duplicates(products)
        self.products = products
        self.shop_names = shop_service.shop_name_map()

    def render(self):
        items = []
        for p in self.products:
            entry = p.as_dict()
            entry["shop_name"] = shop_service.resolve_shop_name(self.shop_names, p.shop_id)
            items.append(entry)
        return {"visible_only": self.visible_only, "items": items}

    def adjust_stock(self, product_id, delta):
        product, reached_zero = product_service.adjust_stock(product_id, delta)
        return {"product": product.as_dict(), "prompt_add_to_list": reached_zero}

    def add_to_list(self, product_id):
        return cart_service.add_to_cart(product_service.get_product(product_id))

    def hide(self, product_id):
        return product_service.set_visibility(product_id, False)

    def delete(self, product_id, confirm=False):
        product = product_service.get_product(product_id)
        if not confirm:
            raise ConfirmationRequired(f"Delete {product.name}?", scope="product", count=1)
        product_service.delete_product(product_id)
