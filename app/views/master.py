from collections import OrderedDict

from app.services import products as product_service
from app.services import shops as shop_service
from app.views.base import ScreenState

BY_SHOP = "shop"
BY_PRODUCT = "product"


class MasterScreen(ScreenState):
    """Product master in two layouts: per shop, or per product across shops."""

    tables = ("shopping_list", "shops")

    def __init__(self, mode=BY_SHOP, search="", client=None):
        super().__init__(client)
        self.mode = mode if mode in (BY_SHOP, BY_PRODUCT) else BY_SHOP
        self.search = search or ""
        self.products = []
        self.shops = []

    def load(self):
        self.products = product_service.list_products()
        self.shops = shop_service.list_shops()

    def by_shop(self):
        result = []
        for shop in self.shops:
            items = [p for p in self.products if p.shop_id == shop.id]
            if self.search and self.search not in shop.name:
                items = [
                    p for p in items
                    if self.search in p.name or self.search in (p.brand or "")
                ]
                if not items:
                    continue
            result.append({**shop.as_dict(), "items": [p.as_dict() for p in items]})
        return result

    def by_product(self):
        names = shop_service.shop_name_map(self.shops)
        groups: "OrderedDict[tuple, dict]" = OrderedDict()
        for p in self.products:
            key = (p.name, p.brand or "")
            group = groups.setdefault(key, {
                "name": p.name,
                "brand": p.brand or "",
                "unit": p.unit or "",
                "amount": p.amount or "",
                "stores": [],
            })
            group["stores"].append({
                **p.as_dict(),
                "shop_name": shop_service.resolve_shop_name(names, p.shop_id),
            })

        result = []
        for group in groups.values():
            if self.search not in group["name"] and self.search not in group["brand"]:
                continue
            group["stores"].sort(key=lambda s: s["price"])
            for idx, store in enumerate(group["stores"]):
                store["cheapest"] = idx == 0
            result.append(group)
        return result

    def render(self):
        if self.mode == BY_PRODUCT:
            return {"view": BY_PRODUCT, "search": self.search, "products": self.by_product()}
        return {"view": BY_SHOP, "search": self.search, "shops": self.by_shop()}
