import pytest

from app.services.backend import backend, change_feed, BackendError
from app.utils.db import transactional
from app.version import API_PREFIX
from models import db
from models.shop import Shop


def test_backend_crud_and_change_events(app):
    seen = []
    sub = backend.subscribe("shops", seen.append)
    try:
        shop = backend.insert("shops", {"name": "A"})
        backend.insert("shops", {"name": "B"})
        assert [s.name for s in backend.select("shops", order_by="-id")] == ["B", "A"]
        assert backend.select("shops", name="A")[0].id == shop.id

        backend.update("shops", shop.id, {"location": "east"})
        assert backend.get("shops", shop.id).location == "east"
        assert backend.update("shops", shop.id + 99, {"name": "x"}) is None

        assert backend.delete("shops", [shop.id, shop.id + 99]) == 1
        assert backend.delete("shops", []) == 0
    finally:
        sub.unsubscribe()
    assert seen == ["shops"] * 4

    backend.insert("shops", {"name": "C"})
    assert len(seen) == 4


def test_unknown_table_is_rejected(app):
    with pytest.raises(KeyError):
        backend.select("orders")
    with pytest.raises(KeyError):
        backend.subscribe("orders", lambda table: None)


def test_failed_write_raises_backend_error_and_publishes_nothing(app):
    seen = []
    sub = backend.subscribe("shops", seen.append)
    try:
        with pytest.raises(BackendError) as exc:
            backend.insert("shops", {"name": None})
        assert "insert into shops failed" in str(exc.value)
    finally:
        sub.unsubscribe()
    assert seen == []
    assert Shop.query.count() == 0


def test_transactional_publishes_after_commit_only(app):
    seen = []
    sub = change_feed.subscribe("shops", seen.append)
    try:
        with pytest.raises(RuntimeError):
            with transactional("boom"):
                db.session.add(Shop(name="Rolled back"))
                db.session.flush()
                raise RuntimeError("abort")
        assert seen == []

        with transactional():
            db.session.add(Shop(name="Kept"))
        assert seen == ["shops"]
    finally:
        sub.unsubscribe()
    assert change_feed.subscriber_count("shops") == 0


def test_versions_endpoint_counts_changes(client, make_shop):
    before = client.get(f"{API_PREFIX}/changes").get_json()["data"]["versions"]
    make_shop()
    after = client.get(f"{API_PREFIX}/changes").get_json()["data"]["versions"]
    assert after["shops"] == before["shops"] + 1
    assert after["cart_items"] == before["cart_items"]


def test_stream_emits_changed_event(client):
    resp = client.get(f"{API_PREFIX}/changes/stream?tables=shops")
    assert resp.mimetype == "text/event-stream"
    change_feed.publish("shops")
    body = resp.get_data(as_text=True)
    assert body.startswith(": connected")
    assert "event: changed" in body
    assert '"table": "shops"' in body
    assert body.rstrip().endswith(": timeout")
    assert change_feed.subscriber_count("shops") == 0


def test_stream_rejects_unknown_table(client):
    resp = client.get(f"{API_PREFIX}/changes/stream?tables=shops,orders")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Unknown table: orders"
