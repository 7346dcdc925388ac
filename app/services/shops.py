from flask import current_app

from app.services.backend import backend
from models.shop import Shop

TABLE = Shop.__tablename__


class ShopValidationError(Exception):
    pass


class ShopNotFound(Exception):
    pass


def list_shops():
    return backend.select(TABLE, order_by="id")


def create_shop(data) -> Shop:
    name = (data.get("name") or "").strip()
    if not name:
        raise ShopValidationError("Shop name is required")
    return backend.insert(TABLE, {
        "name": name,
        "location": (data.get("location") or "").strip(),
    })


def update_shop(shop_id, data) -> Shop:
    shop = backend.get(TABLE, shop_id)
    if shop is None:
        raise ShopNotFound("Shop not found")
    values = {}
    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            raise ShopValidationError("Shop name is required")
        values["name"] = name
    if "location" in data:
        values["location"] = (data.get("location") or "").strip()
    return backend.update(TABLE, shop_id, values)


def delete_shop(shop_id) -> None:
    # Products keep their shop_id; they fall back to the placeholder label.
    if backend.get(TABLE, shop_id) is None:
        raise ShopNotFound("Shop not found")
    backend.delete(TABLE, [shop_id])


def shop_exists(shop_id) -> bool:
    return backend.get(TABLE, shop_id) is not None


def shop_name_map(shops=None) -> dict:
    return {s.id: s.name for s in (list_shops() if shops is None else shops)}


def resolve_shop_name(names: dict, shop_id) -> str:
    return names.get(shop_id) or current_app.config.get("UNKNOWN_SHOP_LABEL", "Unknown shop")
