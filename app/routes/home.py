from flask import Blueprint, request
from app.services.cart import ALREADY_LISTED, REOPENED
from app.services.products import ProductNotFound
from app.utils import ok, error, validate_schema
from app.schemas.inventory import AddToListRequest
from app.version import API_PREFIX
from app.views import HomeScreen, mounted

home_bp = Blueprint("home", __name__, url_prefix=API_PREFIX)

ADD_MESSAGES = {
    ALREADY_LISTED: "Already in list",
    REOPENED: "Moved back onto the list",
}


def add_to_list_response(result, item):
    return ok(
        {"result": result, "item": item.as_dict()},
        message=ADD_MESSAGES.get(result, "Added to list"),
        status=201 if result not in ADD_MESSAGES else 200,
    )


@home_bp.route("/home", methods=["GET"])
def home():
    with mounted(HomeScreen(search=request.args.get("search", ""))) as screen:
        return ok(screen.view())


@home_bp.route("/home/add-to-list", methods=["POST"])
@validate_schema(AddToListRequest)
def add_to_list():
    with mounted(HomeScreen()) as screen:
        try:
            result, item = screen.add_to_list(request.validated_data.product_id)
        except ProductNotFound as e:
            return error(str(e), status=404)
        return add_to_list_response(result, item)
