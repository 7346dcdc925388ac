from models import db
from models.product import Product
from models.cart import CartItem
from app.version import API_PREFIX


def test_inventory_lists_visible_products_with_shop_name(client, make_shop, make_product):
    shop_id = make_shop("Green Mart")
    make_product(shop_id, "Milk")
    make_product(shop_id, "Hidden", visible=False)

    data = client.get(f"{API_PREFIX}/inventory").get_json()["data"]
    assert data["visible_only"] is True
    assert [i["name"] for i in data["items"]] == ["Milk"]
    assert data["items"][0]["shop_name"] == "Green Mart"

    data = client.get(f"{API_PREFIX}/inventory?visible_only=false").get_json()["data"]
    assert [i["name"] for i in data["items"]] == ["Milk", "Hidden"]


def test_stock_increment_and_clamped_decrement(client, app, make_shop, make_product):
    shop_id = make_shop()
    product_id = make_product(shop_id, stock=1)

    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/stock", json={"delta": 1})
    data = resp.get_json()["data"]
    assert data["product"]["stock"] == 2
    assert data["prompt_add_to_list"] is False

    client.post(f"{API_PREFIX}/inventory/{product_id}/stock", json={"delta": -1})
    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/stock", json={"delta": -1})
    data = resp.get_json()["data"]
    assert data["product"]["stock"] == 0
    assert data["prompt_add_to_list"] is True
    assert data["items"][0]["stock"] == 0

    # already at zero: stays at zero and does not prompt again
    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/stock", json={"delta": -1})
    data = resp.get_json()["data"]
    assert data["product"]["stock"] == 0
    assert data["prompt_add_to_list"] is False

    with app.app_context():
        assert db.session.get(Product, product_id).stock == 0
        assert CartItem.query.count() == 0


def test_stock_validation_and_missing_product(client, make_shop, make_product):
    product_id = make_product(make_shop())
    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/stock", json={"delta": "lots"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"]
    resp = client.post(f"{API_PREFIX}/inventory/{product_id + 9}/stock", json={"delta": 1})
    assert resp.status_code == 404


def test_master_stock_endpoint(client, make_shop, make_product):
    product_id = make_product(make_shop(), stock=3)
    resp = client.post(f"{API_PREFIX}/products/{product_id}/stock", json={"delta": -5})
    assert resp.get_json()["data"]["product"]["stock"] == 0
    assert resp.get_json()["data"]["prompt_add_to_list"] is True


def test_stock_propagates_by_name_and_brand_when_enabled(client, app, make_shop, make_product):
    a, b = make_shop("A"), make_shop("B")
    first = make_product(a, "Milk", brand="Meiji", stock=1)
    second = make_product(b, "Milk", brand="Meiji", stock=4)
    other = make_product(b, "Milk", brand="Morinaga", stock=4)

    app.config["STOCK_PROPAGATES_BY_NAME_BRAND"] = True
    try:
        client.post(f"{API_PREFIX}/inventory/{first}/stock", json={"delta": 1})
    finally:
        app.config["STOCK_PROPAGATES_BY_NAME_BRAND"] = False

    with app.app_context():
        assert db.session.get(Product, first).stock == 2
        assert db.session.get(Product, second).stock == 2
        assert db.session.get(Product, other).stock == 4


def test_hide_product(client, make_shop, make_product):
    product_id = make_product(make_shop())
    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/hide")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["items"] == []
    assert client.post(f"{API_PREFIX}/inventory/{product_id + 1}/hide").status_code == 404


def test_collapsed_inventory(client, make_shop, make_product):
    a, b = make_shop("A"), make_shop("B")
    make_product(a, "Milk", amount="1000")
    make_product(b, "Milk", amount="1000")
    make_product(b, "Milk", amount="500")
    make_product(b, "Milk", brand="Meiji", amount="1000")

    data = client.get(f"{API_PREFIX}/inventory?collapse=true").get_json()["data"]
    assert len(data["items"]) == 3
    assert data["items"][0]["shop_name"] == "A"


def test_add_to_list_from_inventory(client, app, make_shop, make_product):
    product_id = make_product(make_shop(), stock=0)
    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/add-to-list")
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["message"] == "Added to list"
    assert body["data"]["result"] == "added"
    assert body["data"]["item"]["checked"] is False

    resp = client.post(f"{API_PREFIX}/inventory/{product_id}/add-to-list")
    assert resp.status_code == 200
    assert resp.get_json()["message"] == "Already in list"
    with app.app_context():
        assert CartItem.query.count() == 1
