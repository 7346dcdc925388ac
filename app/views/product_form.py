from flask import current_app

from app.services import products as product_service
from app.services import shops as shop_service
from app.services.pricing import tax_included_price
from app.views.base import ScreenState

INVENTORY_PATH = "/inventory"


class ProductFormScreen(ScreenState):
    """Registration / edit form for a single product."""

    tables = ("shops",)

    def __init__(self, edit_id=None, jan=None, client=None):
        super().__init__(client)
        self.edit_id = edit_id
        self.jan = jan or ""
        self.shops = []
        self.product = None

    def load(self):
        self.shops = shop_service.list_shops()
        if self.edit_id is not None and self.product is None:
            self.product = product_service.get_product(self.edit_id)

    def values(self):
        if self.product is not None:
            values = product_service.form_values(self.product)
        else:
            values = {
                "brand": "",
                "name": "",
                "price": "",
                "shop_id": None,
                "stock": 0,
                "jan": "",
                "amount": "",
                "unit": product_service.DEFAULT_UNIT,
                "custom_unit": "",
                "size": "",
                "quantity_in_pack": 1,
            }
        if self.jan:
            values["jan"] = self.jan
        return values

    def render(self):
        values = self.values()
        return {
            "mode": "edit" if self.product is not None else "create",
            "edit_id": self.edit_id,
            "values": values,
            "tax_included_price": self.preview(values.get("price")),
            "shops": [s.as_dict() for s in self.shops],
            "needs_shop": not self.shops,
            "unit_options": list(product_service.UNIT_OPTIONS) + [product_service.UNIT_OTHER],
            "size_options": list(product_service.SIZE_OPTIONS),
        }

    @staticmethod
    def preview(price):
        try:
            return tax_included_price(price, current_app.config.get("TAX_RATE", "0.10"))
        except ArithmeticError:
            return 0

    def submit(self, data):
        product = product_service.save_product(data, edit_id=self.edit_id)
        return {"product": product.as_dict(), "redirect": INVENTORY_PATH}
