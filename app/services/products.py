import logging
from datetime import datetime

import pandas as pd
from flask import current_app

from app.services import shops as shop_service
from app.services.backend import backend
from app.services.pricing import clamp_stock, effective_pack_quantity, PACK_UNIT
from app.utils.db import transactional
from models import db
from models.product import Product
from models.shop import Shop

TABLE = Product.__tablename__

UNIT_OPTIONS = ("g", "ml", "piece", PACK_UNIT, "bottle", "sheet")
UNIT_OTHER = "other"
DEFAULT_UNIT = "g"
SIZE_OPTIONS = ("SS", "S", "M", "L", "LL", "large", "medium", "small")
NO_BRAND = "no-brand"

logger = logging.getLogger(__name__)


class ProductValidationError(Exception):
    pass


class ProductNotFound(Exception):
    pass


def _clean(value) -> str:
    return "" if value is None else str(value).strip()


def _parse_int(value, message):
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ProductValidationError(message)
    if number != int(number):
        raise ProductValidationError(message)
    return int(number)


def resolve_unit(unit, custom_unit=None) -> str:
    unit = _clean(unit) or DEFAULT_UNIT
    if unit == UNIT_OTHER:
        return _clean(custom_unit)
    return unit


def build_product_fields(data, check_shop=True) -> dict:
    """Validate a registration form and return the columns to persist."""
    name = _clean(data.get("name"))
    price_raw = _clean(data.get("price"))
    if not name or not price_raw:
        raise ProductValidationError("Product name and price are required")
    shop_id = data.get("shop_id")
    if shop_id in (None, ""):
        raise ProductValidationError("Please select a shop (register one in the shop master first)")

    price = _parse_int(price_raw, "Price must be a whole number")
    if price < 0:
        raise ProductValidationError("Price must not be negative")
    shop_id = _parse_int(shop_id, "Invalid shop")
    if check_shop and not shop_service.shop_exists(shop_id):
        raise ProductValidationError("Shop not found")

    size = _clean(data.get("size"))
    if size and size not in SIZE_OPTIONS:
        raise ProductValidationError(f"Size must be one of: {', '.join(SIZE_OPTIONS)}")

    unit = resolve_unit(data.get("unit"), data.get("custom_unit"))
    stock = data.get("stock")
    stock = 0 if stock in (None, "") else max(0, _parse_int(stock, "Stock must be a whole number"))

    return {
        "brand": _clean(data.get("brand")) or None,
        "name": name,
        "price": price,
        "shop_id": shop_id,
        "stock": stock,
        "jan": _clean(data.get("jan")) or None,
        "amount": _clean(data.get("amount")) or None,
        "unit": unit,
        "size": size or None,
        "quantity_in_pack": effective_pack_quantity(unit, data.get("quantity_in_pack")),
    }


def get_product(product_id) -> Product:
    product = backend.get(TABLE, product_id)
    if product is None:
        raise ProductNotFound("Product not found")
    return product


def save_product(data, edit_id=None) -> Product:
    fields = build_product_fields(data)
    fields["updated_at"] = datetime.utcnow()
    if edit_id is not None:
        get_product(edit_id)
        if "stock" not in data:
            # absent stock keeps the current count
            fields.pop("stock")
        return backend.update(TABLE, edit_id, fields)
    fields["is_visible"] = bool(current_app.config.get("NEW_PRODUCT_VISIBLE", False))
    return backend.insert(TABLE, fields)


def form_values(product: Product) -> dict:
    """Pre-fill values for the edit form, splitting free-text units out."""
    values = product.as_dict()
    if product.unit in UNIT_OPTIONS:
        values["custom_unit"] = ""
    else:
        values["custom_unit"] = product.unit or ""
        values["unit"] = UNIT_OTHER
    return values


def list_products(visible_only=False):
    if visible_only:
        return backend.select(TABLE, order_by="id", is_visible=True)
    return backend.select(TABLE, order_by="id")


def set_visibility(product_id, visible: bool) -> Product:
    get_product(product_id)
    return backend.update(TABLE, product_id, {"is_visible": bool(visible), "updated_at": datetime.utcnow()})


def delete_product(product_id) -> None:
    get_product(product_id)
    backend.delete(TABLE, [product_id])


def adjust_stock(product_id, delta: int):
    """Apply a +/- stock change, clamped at zero.

    Returns ``(product, reached_zero)``; ``reached_zero`` is set when a
    decrement takes the product from some stock down to zero.
    """
    product = get_product(product_id)
    previous = product.stock or 0
    new_stock = clamp_stock(previous, delta)
    now = datetime.utcnow()
    if current_app.config.get("STOCK_PROPAGATES_BY_NAME_BRAND"):
        siblings = Product.query.filter_by(name=product.name, brand=product.brand).all()
        with transactional("Failed to update stock"):
            for row in siblings:
                row.stock = new_stock
                row.updated_at = now
    else:
        backend.update(TABLE, product_id, {"stock": new_stock, "updated_at": now})
    return product, (previous > 0 and new_stock == 0)


def inventory_key(product) -> tuple:
    return (product.name, product.brand or NO_BRAND, product.amount or "")


def collapse_duplicates(products) -> list:
    """Keep the first row per (name, brand-or-placeholder, amount)."""
    seen = {}
    for p in products:
        seen.setdefault(inventory_key(p), p)
    return list(seen.values())


def _read_frame(file, filename):
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    try:
        if ext == "csv":
            return pd.read_csv(file)
        if ext in ("xls", "xlsx"):
            return pd.read_excel(file)
    except Exception as e:
        raise ProductValidationError(f"File read error: {str(e)}")
    raise ProductValidationError("Unsupported file type")


def import_products(file, filename):
    """Bulk-register products from a CSV/Excel sheet.

    Rows need ``name`` and ``price`` plus a shop given either as ``shop_id``
    or as a ``shop`` name. Returns ``(created, skipped)``.
    """
    df = _read_frame(file, filename)
    required_columns = {"name", "price"}
    if not required_columns.issubset(set(df.columns)):
        raise ProductValidationError(f"Missing columns: {', '.join(sorted(required_columns))}")
    if "shop_id" not in df.columns and "shop" not in df.columns:
        raise ProductValidationError("Missing columns: shop_id or shop")

    shops_by_name = {s.name: s.id for s in Shop.query.all()}
    known_ids = set(shops_by_name.values())
    visible = bool(current_app.config.get("NEW_PRODUCT_VISIBLE", False))
    created = skipped = 0

    df = df.astype(object).where(pd.notna(df), None)
    with transactional("Failed to bulk import products"):
        for idx, row in df.iterrows():
            shop_id = row.get("shop_id")
            if shop_id is None and row.get("shop") is not None:
                shop_id = shops_by_name.get(_clean(row.get("shop")))
            data = {key: row.get(key) for key in (
                "brand", "name", "price", "stock", "jan", "amount", "unit", "size", "quantity_in_pack",
            )}
            # numeric cells come back as floats once a column has blanks
            data = {
                key: int(value) if isinstance(value, float) and value.is_integer() else value
                for key, value in data.items()
            }
            try:
                if shop_id is None or int(shop_id) not in known_ids:
                    raise ProductValidationError("Shop not found")
                data["shop_id"] = int(shop_id)
                fields = build_product_fields(data, check_shop=False)
            except (ProductValidationError, TypeError, ValueError) as e:
                logger.info("Skipping import row %s: %s", idx, e)
                skipped += 1
                continue
            fields["is_visible"] = visible
            db.session.add(Product(**fields))
            created += 1
    return created, skipped

