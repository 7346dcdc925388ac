from app.errors import ConfirmationRequired
from app.services import shops as shop_service
from app.views.base import ScreenState


class ShopRegistryScreen(ScreenState):
    tables = ("shops",)

    def __init__(self, client=None):
        super().__init__(client)
        self.shops = []

    def load(self):
        self.shops = shop_service.list_shops()

    def render(self):
        return {"shops": [s.as_dict() for s in self.shops]}

    def create(self, data):
        return shop_service.create_shop(data)

    def edit(self, shop_id, data):
        return shop_service.update_shop(shop_id, data)

    def delete(self, shop_id, confirm=False):
        if not confirm:
            raise ConfirmationRequired(
                "Delete this shop? Products registered to it will show as an unknown shop.",
                scope="shop",
                count=1,
            )
        shop_service.delete_shop(shop_id)
