from collections import OrderedDict

from app.services import cart as cart_service
from app.services import shops as shop_service
from app.views.base import ScreenState


class ShoppingListScreen(ScreenState):
    tables = ("cart_items", "shops")

    def __init__(self, client=None):
        super().__init__(client)
        self.items = []
        self.shop_names = {}

    def load(self):
        self.items = cart_service.list_items()
        self.shop_names = shop_service.shop_name_map()

    def render(self):
        grouped: "OrderedDict[str, list]" = OrderedDict()
        for item in self.items:
            label = shop_service.resolve_shop_name(self.shop_names, item.shop_id)
            grouped.setdefault(label, []).append(item.as_dict())
        has_checked = any(i.checked for i in self.items)
        return {
            "groups": [{"shop_name": name, "items": items} for name, items in grouped.items()],
            "has_checked": has_checked,
            "can_confirm_purchase": has_checked,
        }

    def toggle(self, item_id):
        return cart_service.toggle_checked(item_id)

    def remove(self, item_id):
        cart_service.remove_item(item_id)

    def confirm_purchase(self):
        return cart_service.confirm_purchase()

    def clear(self, confirm=False):
        return cart_service.clear(confirm=confirm)
