import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from app.version import API_PREFIX


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture()
def make_shop(client):
    def _make(name='Shop A', location=''):
        resp = client.post(f"{API_PREFIX}/shops", json={'name': name, 'location': location})
        assert resp.status_code == 201
        return resp.get_json()['data']['shop']['id']
    return _make


@pytest.fixture()
def make_product(client):
    def _make(shop_id, name='Milk', price=198, visible=True, **fields):
        payload = {'name': name, 'price': price, 'shop_id': shop_id, 'unit': 'ml', 'amount': '1000'}
        payload.update(fields)
        resp = client.post(f"{API_PREFIX}/products", json=payload)
        assert resp.status_code == 201, resp.get_json()
        product_id = resp.get_json()['data']['product']['id']
        if visible:
            client.post(f"{API_PREFIX}/products/{product_id}/visibility", json={'visible': True})
        return product_id
    return _make
