import math
import re
from decimal import Decimal, ROUND_FLOOR

# Units priced per 100 rather than per 1
MASS_VOLUME_UNITS = ("g", "ml")
PACK_UNIT = "pack"

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def tax_included_price(price, rate="0.10") -> int:
    """floor(price * (1 + rate)); empty or negative input previews as 0."""
    if price in (None, ""):
        return 0
    value = Decimal(str(price)) * (Decimal("1") + Decimal(str(rate)))
    return max(0, int(value.to_integral_value(rounding=ROUND_FLOOR)))


def parse_amount(amount) -> float:
    """Read the leading number out of a free-text amount ("500", "1.5kg").

    Anything unparseable or zero counts as 1 so unit prices stay defined.
    """
    if isinstance(amount, (int, float)):
        return float(amount) or 1.0
    match = _LEADING_NUMBER.match(str(amount or ""))
    if not match:
        return 1.0
    return float(match.group(1)) or 1.0


def round1(value) -> float:
    """Round to one decimal, halves towards +infinity, on the binary float.

    Same as JavaScript's ``Math.round(x * 10) / 10``: 0.25 -> 0.3 but
    1.45 -> 1.4, because 1.45 * 10 is 14.499999999999998.
    """
    return math.floor(value * 10 + 0.5) / 10


def unit_price(price, amount, unit) -> float:
    qty = parse_amount(amount)
    if unit in MASS_VOLUME_UNITS:
        return round1(price / qty * 100)
    return round1(price / qty)


def unit_label(unit) -> str:
    if unit in MASS_VOLUME_UNITS:
        return f"100{unit}"
    return f"1{unit or ''}"


def clamp_stock(current, delta) -> int:
    return max(0, int(current or 0) + int(delta))


def effective_pack_quantity(unit, quantity_in_pack) -> int:
    if unit != PACK_UNIT:
        return 1
    try:
        qty = int(quantity_in_pack)
    except (TypeError, ValueError):
        return 1
    return qty if qty > 0 else 1
