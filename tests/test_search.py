from types import SimpleNamespace

from app.services.search import (
    to_katakana,
    matches,
    search_products,
    group_by_name,
)


class FakeProduct(SimpleNamespace):
    def as_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand or "",
            "price": self.price,
            "amount": self.amount,
            "unit": self.unit,
            "shop_id": self.shop_id,
        }


def product(id, name, price, amount="100", unit="g", brand=None, jan=None, shop_id=1):
    return FakeProduct(
        id=id, name=name, price=price, amount=amount, unit=unit,
        brand=brand, jan=jan, shop_id=shop_id,
    )


def test_to_katakana_shifts_hiragana_only():
    assert to_katakana("たまご") == "タマゴ"
    assert to_katakana("abc醤油") == "abc醤油"
    assert to_katakana("ぎゅうにゅう") == "ギュウニュウ"


def test_matches_case_insensitive_substring():
    assert matches("MILK", "Fresh milk")
    assert not matches("bread", "Fresh milk")


def test_matches_folds_hiragana_to_katakana():
    assert matches("たまご", "タマゴ 10個")
    assert matches("タマゴ", "たまごパック")


def test_matches_synonyms_both_directions():
    assert matches("しょうゆ", "濃口醤油")
    assert matches("醤油", "こいくちしょうゆ")
    assert matches("ぎゅうにゅう", "おいしい牛乳")
    assert matches("卵", "たまご")


def test_matches_empty_query():
    assert not matches("", "anything")
    assert not matches("   ", "anything")


def test_search_products_uses_name_brand_and_barcode():
    items = [
        product(1, "Milk", 198, brand="Meiji"),
        product(2, "Bread", 150, jan="4901234567890"),
        product(3, "Butter", 400),
    ]
    assert [p.id for p in search_products(items, "meiji")] == [1]
    assert [p.id for p in search_products(items, "49012345")] == [2]
    assert search_products(items, "") == []


def test_group_by_name_sorts_by_unit_price_and_flags_cheapest():
    items = [
        product(1, "Milk", 198, amount="1000", unit="ml", shop_id=1),
        product(2, "Milk", 120, amount="500", unit="ml", shop_id=2),
        product(3, "Milk", 168, amount="1000", unit="ml", shop_id=3),
        product(4, "Eggs", 250, amount="10", unit="piece", shop_id=1),
    ]
    names = {1: "North", 2: "South"}
    groups = group_by_name(items, lambda sid: names.get(sid, "Unknown shop"))

    assert [g["name"] for g in groups] == ["Milk", "Eggs"]
    milk = groups[0]["items"]
    assert [m["id"] for m in milk] == [3, 1, 2]
    assert [m["unit_price"] for m in milk] == [16.8, 19.8, 24.0]
    assert [m["cheapest"] for m in milk] == [True, False, False]
    assert milk[0]["shop_name"] == "Unknown shop"
    assert milk[0]["unit_label"] == "100ml"

    eggs = groups[1]["items"]
    assert eggs[0]["unit_price"] == 25.0
    assert eggs[0]["unit_label"] == "1piece"
    assert eggs[0]["cheapest"] is True
