import threading

from app.services.backend import backend, change_feed
from app.views import HomeScreen, InventoryScreen, ShoppingListScreen, mounted
from models import db


def test_mount_loads_and_subscribes(app):
    backend.insert("shops", {"name": "A"})
    screen = InventoryScreen(visible_only=False)
    with mounted(screen):
        assert screen.is_mounted
        assert screen.loading is False
        assert change_feed.subscriber_count("shopping_list") >= 1
        assert screen.view()["items"] == []
    assert not screen.is_mounted
    assert change_feed.subscriber_count("shopping_list") == 0


def test_change_on_watched_table_marks_stale_then_refetches_on_view(app):
    shop = backend.insert("shops", {"name": "A"})
    with mounted(HomeScreen(search="milk")) as screen:
        assert screen.view()["not_found"] is True
        backend.insert("shopping_list", {
            "name": "Milk", "price": 198, "shop_id": shop.id,
            "amount": "1000", "unit": "ml", "is_visible": True,
        })
        assert screen.stale is True
        assert screen.refresh_count == 0

        groups = screen.view()["groups"]
        assert screen.refresh_count == 1
        assert screen.stale is False
        assert groups[0]["items"][0]["shop_name"] == "A"


def test_unwatched_table_does_not_refetch(app):
    with mounted(ShoppingListScreen()) as screen:
        backend.insert("shopping_list", {"name": "Milk", "price": 1, "shop_id": 1})
        assert screen.stale is False
        backend.insert("cart_items", {"name": "Milk", "price": 1, "shop_id": 1})
        assert screen.view()["groups"][0]["shop_name"] == "Unknown shop"
        assert screen.refresh_count == 1


def test_commit_on_another_thread_only_flags_the_screen(app):
    owner = threading.get_ident()
    load_threads = []

    class TrackingScreen(InventoryScreen):
        def load(self):
            load_threads.append(threading.get_ident())
            super().load()

    def writer():
        with app.app_context():
            backend.insert("shopping_list", {"name": "Tofu", "price": 98, "shop_id": 1, "is_visible": True})
            backend.insert("shopping_list", {"name": "Natto", "price": 88, "shop_id": 1, "is_visible": True})

    with mounted(TrackingScreen()) as screen:
        worker = threading.Thread(target=writer)
        worker.start()
        worker.join()

        assert load_threads == [owner]
        assert screen.stale is True

        names = [i["name"] for i in screen.view()["items"]]
        assert names == ["Tofu", "Natto"]
        assert load_threads == [owner, owner]
        assert all(p in db.session for p in screen.products)


def test_unmounted_screen_stops_listening(app):
    screen = ShoppingListScreen().mount()
    screen.unmount()
    backend.insert("cart_items", {"name": "Milk", "price": 1, "shop_id": 1})
    assert screen.stale is False
    assert screen.refresh_count == 0
