"""Free-text product matching and unit-price comparison groups.

Everything here is pure: callers hand in already-loaded products and a shop
name lookup, and get plain dicts back.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from app.services.pricing import unit_label, unit_price

HIRAGANA_START = 0x3041  # ぁ
HIRAGANA_END = 0x3093    # ん
KATAKANA_OFFSET = 0x60

# Pairs are matched both ways round
SYNONYMS = {
    "しょうゆ": "醤油",
    "たまご": "卵",
    "ぎゅうにゅう": "牛乳",
}


def to_katakana(text: str) -> str:
    return "".join(
        chr(ord(ch) + KATAKANA_OFFSET) if HIRAGANA_START <= ord(ch) <= HIRAGANA_END else ch
        for ch in text
    )


def matches(query: str, target: str, synonyms: Optional[Dict[str, str]] = None) -> bool:
    query = (query or "").strip().lower()
    target = (target or "").lower()
    if not query:
        return False
    if query in target or to_katakana(query) in to_katakana(target):
        return True
    for key, value in (SYNONYMS if synonyms is None else synonyms).items():
        if key in query and value in target:
            return True
        if value in query and key in target:
            return True
    return False


def search_text(product) -> str:
    return f"{product.name}{product.brand or ''}{product.jan or ''}"


def search_products(products: Iterable, query: str) -> list:
    if not (query or "").strip():
        return []
    return [p for p in products if matches(query, search_text(p))]


def group_by_name(products: Iterable, shop_name) -> List[dict]:
    """Group products by name, cheapest unit price first in every group.

    ``shop_name`` maps a shop id to its display label.
    """
    grouped: "OrderedDict[str, list]" = OrderedDict()
    for p in products:
        entry = p.as_dict()
        entry["shop_name"] = shop_name(p.shop_id)
        entry["unit_price"] = unit_price(p.price, p.amount, p.unit)
        entry["unit_label"] = unit_label(p.unit)
        grouped.setdefault(p.name, []).append(entry)

    result = []
    for name, members in grouped.items():
        members.sort(key=lambda m: m["unit_price"])
        for idx, member in enumerate(members):
            member["cheapest"] = idx == 0
        result.append({"name": name, "items": members})
    return result
