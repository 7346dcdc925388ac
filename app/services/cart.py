import logging

from app.errors import ConfirmationRequired
from app.metrics import CART_ADDITIONS, PURCHASED_ITEMS
from app.services.backend import backend
from app.utils.db import transactional
from models import db
from models.cart import CartItem
from models.product import Product

TABLE = CartItem.__tablename__

ADDED = "added"
REOPENED = "reopened"
ALREADY_LISTED = "already_listed"

logger = logging.getLogger(__name__)


class CartError(Exception):
    pass


class CartItemNotFound(CartError):
    pass


def list_items():
    return backend.select(TABLE, order_by="id")


def find_open_row(name, shop_id):
    return CartItem.query.filter_by(name=name, shop_id=shop_id).order_by(CartItem.id).first()


def add_to_cart(product: Product):
    """Put a product on the shopping list, keyed by (name, shop).

    Returns ``(result, cart_item)`` where result is one of ``added``,
    ``reopened`` (a checked row was un-checked) or ``already_listed``.
    """
    existing = find_open_row(product.name, product.shop_id)
    if existing is not None:
        if existing.checked:
            item = backend.update(TABLE, existing.id, {"checked": False})
            result = REOPENED
        else:
            item, result = existing, ALREADY_LISTED
    else:
        item = backend.insert(TABLE, {
            "name": product.name,
            "price": product.price,
            "amount": product.amount,
            "unit": product.unit,
            "shop_id": product.shop_id,
            "stock": product.stock or 0,
            "checked": False,
        })
        result = ADDED
    CART_ADDITIONS.labels(result).inc()
    return result, item


def get_item(item_id) -> CartItem:
    item = backend.get(TABLE, item_id)
    if item is None:
        raise CartItemNotFound("Item not found in list")
    return item


def toggle_checked(item_id) -> CartItem:
    item = get_item(item_id)
    return backend.update(TABLE, item_id, {"checked": not item.checked})


def remove_item(item_id) -> None:
    get_item(item_id)
    backend.delete(TABLE, [item_id])


def linked_product(item: CartItem):
    return (
        Product.query.filter_by(name=item.name, shop_id=item.shop_id)
        .order_by(Product.id)
        .first()
    )


def confirm_purchase() -> dict:
    """Restock every checked item by one and drop those rows from the list.

    Runs as one transaction: either all increments and deletions land or
    none of them do.
    """
    checked = CartItem.query.filter_by(checked=True).order_by(CartItem.id).all()
    if not checked:
        raise CartError("No checked items to purchase")

    restocked, unlinked = [], []
    with transactional("Failed to confirm purchase"):
        for item in checked:
            product = linked_product(item)
            if product is None:
                logger.warning("No product linked to cart item %s (%s)", item.id, item.name)
                unlinked.append(item.id)
            else:
                product.stock = (product.stock or 0) + 1
                restocked.append(product.id)
            db.session.delete(item)

    PURCHASED_ITEMS.inc(len(checked))
    return {
        "purchased": len(checked),
        "restocked_product_ids": restocked,
        "unlinked_item_ids": unlinked,
    }


def clear(confirm=False) -> dict:
    """Remove checked items, or the whole list when nothing is checked."""
    items = list_items()
    checked_ids = [i.id for i in items if i.checked]
    if checked_ids:
        scope, ids = "checked", checked_ids
        message = f"Delete {len(ids)} checked item(s)?"
    else:
        scope, ids = "all", [i.id for i in items]
        message = "Clear the whole list?"
    if not ids:
        return {"scope": scope, "removed": 0}
    if not confirm:
        raise ConfirmationRequired(message, scope, len(ids))
    removed = backend.delete(TABLE, ids)
    return {"scope": scope, "removed": removed}
