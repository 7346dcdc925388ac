from flask import Blueprint, request
from app.services.cart import CartError, CartItemNotFound
from app.utils import ok, error, parse_bool, validate_schema
from app.schemas.inventory import ConfirmRequest
from app.version import API_PREFIX
from app.views import ShoppingListScreen, mounted

shopping_list_bp = Blueprint("shopping_list", __name__, url_prefix=API_PREFIX)


@shopping_list_bp.route("/shopping-list", methods=["GET"])
def shopping_list():
    with mounted(ShoppingListScreen()) as screen:
        return ok(screen.view())


@shopping_list_bp.route("/shopping-list/<int:item_id>/toggle", methods=["POST"])
def toggle_item(item_id):
    with mounted(ShoppingListScreen()) as screen:
        try:
            item = screen.toggle(item_id)
        except CartItemNotFound as e:
            return error(str(e), status=404)
        return ok({"item": item.as_dict(), **screen.view()})


@shopping_list_bp.route("/shopping-list/<int:item_id>", methods=["DELETE"])
def remove_item(item_id):
    with mounted(ShoppingListScreen()) as screen:
        try:
            screen.remove(item_id)
        except CartItemNotFound as e:
            return error(str(e), status=404)
        return ok(screen.view(), message="Item removed")


@shopping_list_bp.route("/shopping-list/confirm-purchase", methods=["POST"])
def confirm_purchase():
    with mounted(ShoppingListScreen()) as screen:
        try:
            summary = screen.confirm_purchase()
        except CartError as e:
            return error(str(e), status=400)
        return ok({**summary, **screen.view()}, message="Purchase confirmed")


@shopping_list_bp.route("/shopping-list/clear", methods=["POST"])
@validate_schema(ConfirmRequest)
def clear_list():
    confirm = request.validated_data.confirm or parse_bool(request.args.get("confirm"))
    with mounted(ShoppingListScreen()) as screen:
        summary = screen.clear(confirm=confirm)
        return ok({**summary, **screen.view()}, message="List cleared")
