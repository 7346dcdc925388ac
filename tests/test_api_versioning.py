import sys
import importlib


def _load_app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    for m in ["main", "app.config", "app.test_support"]:
        if m in sys.modules:
            del sys.modules[m]
    import main as entry
    importlib.reload(entry)
    return entry.app


def _rules(app):
    return {(str(r.rule), m) for r in app.url_map.iter_rules() for m in r.methods}


def test_test_support_mounted_twice(monkeypatch):
    app = _load_app(monkeypatch)
    c = app.test_client()
    for path in ("/__ok", "/api/v1/test_support/__ok"):
        r = c.get(path)
        assert r.status_code == 200
        assert r.get_json()["data"]["ping"] == "pong"


def test_screen_routes_live_under_api_v1(monkeypatch):
    rules = _rules(_load_app(monkeypatch))
    expected = {
        ("/api/v1/shops", "GET"),
        ("/api/v1/shops", "POST"),
        ("/api/v1/shops/<int:shop_id>/edit", "POST"),
        ("/api/v1/products", "POST"),
        ("/api/v1/products/form", "GET"),
        ("/api/v1/products/bulk-upload", "POST"),
        ("/api/v1/home", "GET"),
        ("/api/v1/inventory", "GET"),
        ("/api/v1/master", "GET"),
        ("/api/v1/shopping-list", "GET"),
        ("/api/v1/shopping-list/confirm-purchase", "POST"),
        ("/api/v1/scan/result", "POST"),
        ("/api/v1/changes/stream", "GET"),
    }
    assert expected <= rules
    assert not any(rule.startswith("/shops") for rule, _ in rules)


def test_swagger_spec_only_lists_versioned_routes(monkeypatch):
    app = _load_app(monkeypatch)
    spec = app.test_client().get("/apispec.json").get_json()
    assert all(path.startswith("/api/v1/") for path in spec.get("paths", {}))
