from flask import Blueprint, request
from app.services.shops import ShopValidationError, ShopNotFound
from app.utils import ok, error, validate_schema, parse_bool
from app.schemas.shop import ShopEditRequest
from app.version import API_PREFIX
from app.views import ShopRegistryScreen, mounted

shops_bp = Blueprint("shops", __name__, url_prefix=API_PREFIX)


@shops_bp.route("/shops", methods=["GET"])
def list_shops():
    with mounted(ShopRegistryScreen()) as screen:
        return ok(screen.view())


@shops_bp.route("/shops", methods=["POST"])
def create_shop():
    data = request.get_json(silent=True) or {}
    with mounted(ShopRegistryScreen()) as screen:
        try:
            shop = screen.create(data)
        except ShopValidationError as e:
            return error(str(e), status=400)
        return ok({"shop": shop.as_dict(), **screen.view()}, message="Shop created", status=201)


@shops_bp.route("/shops/<int:shop_id>/edit", methods=["POST"])
@validate_schema(ShopEditRequest)
def edit_shop(shop_id):
    payload = request.validated_data.model_dump(exclude_none=True)
    with mounted(ShopRegistryScreen()) as screen:
        try:
            shop = screen.edit(shop_id, payload)
        except ShopNotFound as e:
            return error(str(e), status=404)
        except ShopValidationError as e:
            return error(str(e), status=400)
        return ok({"shop": shop.as_dict(), **screen.view()}, message="Shop updated")


@shops_bp.route("/shops/<int:shop_id>", methods=["DELETE"])
def delete_shop(shop_id):
    with mounted(ShopRegistryScreen()) as screen:
        try:
            screen.delete(shop_id, confirm=parse_bool(request.args.get("confirm")))
        except ShopNotFound as e:
            return error(str(e), status=404)
        return ok(screen.view(), message="Shop deleted")
