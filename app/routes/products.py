from flask import Blueprint, request, current_app
from app.services import products as product_service
from app.services.products import ProductValidationError, ProductNotFound
from app.utils import ok, error, validate_schema, parse_bool
from app.schemas.inventory import StockAdjustRequest, VisibilityRequest
from app.version import API_PREFIX
from app.views import ProductFormScreen, InventoryScreen, mounted
from extensions import limiter

products_bp = Blueprint("products", __name__, url_prefix=API_PREFIX)


def _edit_id():
    raw = request.args.get("editId")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        return -1


@products_bp.route("/products/form", methods=["GET"])
def product_form():
    screen = ProductFormScreen(edit_id=_edit_id(), jan=request.args.get("jan"))
    try:
        with mounted(screen):
            return ok(screen.view())
    except ProductNotFound as e:
        return error(str(e), status=404)


@products_bp.route("/products", methods=["POST"])
def save_product():
    data = request.get_json(silent=True) or {}
    edit_id = _edit_id()
    if edit_id is None and data.get("editId") not in (None, ""):
        try:
            edit_id = int(data["editId"])
        except (TypeError, ValueError):
            edit_id = -1
    screen = ProductFormScreen(edit_id=edit_id)
    try:
        with mounted(screen):
            result = screen.submit(data)
    except ProductNotFound as e:
        return error(str(e), status=404)
    except ProductValidationError as e:
        return error(str(e), status=400)
    message = "Product updated" if edit_id is not None else "Product registered"
    return ok(result, message=message, status=200 if edit_id is not None else 201)


@products_bp.route("/products/tax-preview", methods=["GET"])
def tax_preview():
    price = request.args.get("price", "")
    return ok({"price": price, "tax_included_price": ProductFormScreen.preview(price)})


@products_bp.route("/products/<int:product_id>/visibility", methods=["POST"])
@validate_schema(VisibilityRequest)
def set_visibility(product_id):
    try:
        product = product_service.set_visibility(product_id, request.validated_data.visible)
    except ProductNotFound as e:
        return error(str(e), status=404)
    return ok(product.as_dict(), message="Visibility updated")


@products_bp.route("/products/<int:product_id>/stock", methods=["POST"])
@validate_schema(StockAdjustRequest)
def adjust_stock(product_id):
    with mounted(InventoryScreen(visible_only=False)) as screen:
        try:
            result = screen.adjust_stock(product_id, request.validated_data.delta)
        except ProductNotFound as e:
            return error(str(e), status=404)
        return ok(result, message="Stock updated")


@products_bp.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    with mounted(InventoryScreen(visible_only=False)) as screen:
        try:
            screen.delete(product_id, confirm=parse_bool(request.args.get("confirm")))
        except ProductNotFound as e:
            return error(str(e), status=404)
        return ok(message="Product deleted")


@products_bp.route("/products/bulk-upload", methods=["POST"])
@limiter.limit(lambda: current_app.config.get("BULK_UPLOAD_LIMIT", "10 per hour"))
def bulk_upload_products():
    file = request.files.get("file")
    if not file:
        return error("No file uploaded", status=400)
    try:
        created, skipped = product_service.import_products(file, file.filename or "")
    except ProductValidationError as e:
        return error(str(e), status=400)
    return ok(
        {"created": created, "skipped": skipped},
        message=f"{created} products uploaded",
    )
