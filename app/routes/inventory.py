from flask import Blueprint, request
from app.routes.home import add_to_list_response
from app.services.products import ProductNotFound
from app.utils import ok, error, validate_schema, parse_bool
from app.schemas.inventory import StockAdjustRequest
from app.version import API_PREFIX
from app.views import InventoryScreen, mounted

inventory_bp = Blueprint("inventory", __name__, url_prefix=API_PREFIX)


def _screen():
    return InventoryScreen(
        visible_only=parse_bool(request.args.get("visible_only"), default=True),
        collapse=parse_bool(request.args.get("collapse")),
    )


@inventory_bp.route("/inventory", methods=["GET"])
def inventory():
    with mounted(_screen()) as screen:
        return ok(screen.view())


@inventory_bp.route("/inventory/<int:product_id>/stock", methods=["POST"])
@validate_schema(StockAdjustRequest)
def adjust_stock(product_id):
    with mounted(_screen()) as screen:
        try:
            result = screen.adjust_stock(product_id, request.validated_data.delta)
        except ProductNotFound as e:
            return error(str(e), status=404)
        result.update(screen.view())
        return ok(result, message="Stock updated")


@inventory_bp.route("/inventory/<int:product_id>/hide", methods=["POST"])
def hide_product(product_id):
    with mounted(_screen()) as screen:
        try:
            screen.hide(product_id)
        except ProductNotFound as e:
            return error(str(e), status=404)
        return ok(screen.view(), message="Product hidden")


@inventory_bp.route("/inventory/<int:product_id>/add-to-list", methods=["POST"])
def add_to_list(product_id):
    with mounted(_screen()) as screen:
        try:
            result, item = screen.add_to_list(product_id)
        except ProductNotFound as e:
            return error(str(e), status=404)
        return add_to_list_response(result, item)
