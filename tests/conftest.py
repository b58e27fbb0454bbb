import os

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import itertools
import json
from typing import Any, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from storefront.app import app as fastapi_app
from storefront.app_setup import dependencies as deps
from storefront.errors import PersistenceError
from storefront.orders.repository import PENDING

VALID_SIGNATURE = "t=1,v1=valid"
CHECKOUT_URL = "https://checkout.stripe.test/c/pay/cs_test_123"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


# --- Fakes en mémoire (mêmes signatures que les repositories Supabase) ---

class FakeCatalogRepository:
    def __init__(self):
        self.categories = [{"id": 1, "name": "Shirts", "slug": "shirts"}]
        self.metadata = {
            1: [{"id": "minimalist", "name": "Minimalist", "values": [
                {"id": "night", "label": "Night"},
                {"id": "beach", "label": "Beach"},
            ]}],
        }
        self.products = {
            1: {"id": 1, "label": "Shirt 1", "price": 89.9, "description": "Test shirt 1", "categoryId": 1,
                "images": [{"id": 2, "url": "product_1_2.jpg"}, {"id": 1, "url": "product_1_1.jpg"}]},
            2: {"id": 2, "label": "Shirt 2", "price": "94.50", "description": "Test shirt 2", "categoryId": 1,
                "images": []},
        }
        self.banners = [{"img": "banner_promo_1.jpg", "link": "/categories/shirts"}]
        self.lookups: List[List[int]] = []

    def get_category_by_slug(self, slug):
        return next((c for c in self.categories if c["slug"] == slug), None)

    def get_category_metadata(self, category_id):
        return self.metadata.get(category_id, [])

    def get_product(self, product_id):
        return self.products.get(product_id)

    def get_products_map(self, ids):
        wanted = [int(i) for i in ids]
        self.lookups.append(wanted)
        return {i: self.products[i] for i in wanted if i in self.products}

    def list_products(self, category_id=None, limit=50):
        rows = [p for p in self.products.values() if category_id is None or p["categoryId"] == category_id]
        return rows[:limit]

    def list_banners(self):
        return list(self.banners)


class FakeUserRepository:
    def __init__(self):
        self._ids = itertools.count(100)
        self._address_ids = itertools.count(100)
        self.users: Dict[int, Dict[str, Any]] = {
            1: {"id": 1, "name": "Alice", "email": "alice@example.com", "password": "", "token": "token-u1"},
            2: {"id": 2, "name": "Bob", "email": "bob@example.com", "password": "", "token": "token-u2"},
        }
        self.addresses: Dict[int, Dict[str, Any]] = {
            10: {"id": 10, "user_id": 1, "zipcode": "01001-000", "street": "Rua A", "number": "12",
                 "city": "Sao Paulo", "state": "SP", "country": "Brazil", "complement": None},
            20: {"id": 20, "user_id": 2, "zipcode": "20040-002", "street": "Rua B", "number": "7",
                 "city": "Rio", "state": "RJ", "country": "Brazil", "complement": "apt 3"},
        }

    def get_user_by_email(self, email):
        return next((u for u in self.users.values() if u["email"] == email), None)

    def create_user(self, *, name, email, password_hash):
        uid = next(self._ids)
        self.users[uid] = {"id": uid, "name": name, "email": email, "password": password_hash, "token": None}
        return dict(self.users[uid])

    def set_token(self, user_id, token):
        self.users[user_id]["token"] = token

    def get_user_id_by_token(self, token):
        return next((u["id"] for u in self.users.values() if u.get("token") == token), None)

    def create_address(self, user_id, address):
        aid = next(self._address_ids)
        self.addresses[aid] = {**address, "id": aid, "user_id": user_id}
        return {k: v for k, v in self.addresses[aid].items() if k != "user_id"}

    def list_addresses(self, user_id):
        return [{k: v for k, v in a.items() if k != "user_id"} for a in self.addresses.values() if a["user_id"] == user_id]

    def get_address(self, user_id, address_id):
        a = self.addresses.get(address_id)
        if not a or a["user_id"] != user_id:
            return None
        return {k: v for k, v in a.items() if k != "user_id"}

    def delete_address(self, user_id, address_id):
        if not self.get_address(user_id, address_id):
            return False
        del self.addresses[address_id]
        return True


class FakeOrderRepository:
    def __init__(self, catalog: FakeCatalogRepository):
        self.catalog = catalog
        self._ids = itertools.count(1)
        self.orders: Dict[int, Dict[str, Any]] = {}
        self.items: Dict[int, List[Dict[str, Any]]] = {}
        self.fail_writes = False

    def create_order(self, order, items):
        if self.fail_writes:
            raise PersistenceError()
        oid = next(self._ids)
        self.orders[oid] = {**order, "id": oid, "created_at": f"2026-01-{oid:02d}T00:00:00+00:00"}
        self.items[oid] = [{**item, "id": oid * 100 + n} for n, item in enumerate(items)]
        return oid

    def get_order_status(self, order_id):
        return (self.orders.get(order_id) or {}).get("status")

    def transition_status(self, order_id, status):
        order = self.orders.get(order_id)
        if not order or order["status"] != PENDING:
            return False
        order["status"] = status
        return True

    def list_user_orders(self, user_id):
        rows = [o for o in self.orders.values() if o["user_id"] == user_id]
        return sorted(rows, key=lambda o: o["created_at"], reverse=True)

    def get_user_order(self, order_id, user_id):
        order = self.orders.get(order_id)
        if not order or order["user_id"] != user_id:
            return None
        order_items = []
        for item in self.items[order_id]:
            product = self.catalog.products.get(item["product_id"]) or {}
            order_items.append({
                "id": item["id"],
                "quantity": item["quantity"],
                "price": item["price"],
                "products": {"id": product.get("id"), "label": product.get("label"),
                             "price": product.get("price"), "product_images": product.get("images")},
            })
        return {**order, "order_items": order_items}


class FakeGateway:
    """Passerelle Stripe simulée: enregistre les appels, signature valide = VALID_SIGNATURE."""

    def __init__(self, url: Optional[str] = CHECKOUT_URL):
        self.url = url
        self.links: List[Dict[str, Any]] = []
        self.sessions: Dict[str, int] = {}

    def create_checkout_link(self, lines, shipping_cost, order_id):
        self.links.append({"lines": list(lines), "shipping_cost": shipping_cost, "order_id": order_id})
        return self.url

    def resolve_order_id_from_session(self, session_id):
        return self.sessions.get(session_id)

    def verify_webhook_signature(self, raw_body, signature_header, webhook_secret=None):
        if signature_header != VALID_SIGNATURE:
            return None
        return json.loads(raw_body)


def make_event(event_type: str, order_id: Optional[int] = None, session_id: str = "cs_test_123") -> Dict[str, Any]:
    metadata = {"orderId": str(order_id)} if order_id is not None else {}
    return {
        "id": "evt_test_1",
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": session_id, "object": "checkout.session", "metadata": metadata}},
    }


# --- Fixtures ---

@pytest.fixture
def catalog_repo() -> FakeCatalogRepository:
    return FakeCatalogRepository()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def order_repo(catalog_repo) -> FakeOrderRepository:
    return FakeOrderRepository(catalog_repo)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def app(catalog_repo, user_repo, order_repo, gateway):
    fastapi_app.dependency_overrides[deps.get_catalog_repository] = lambda: catalog_repo
    fastapi_app.dependency_overrides[deps.get_user_repository] = lambda: user_repo
    fastapi_app.dependency_overrides[deps.get_order_repository] = lambda: order_repo
    fastapi_app.dependency_overrides[deps.get_payment_gateway] = lambda: gateway
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer token-u1"}


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def valid_signature() -> str:
    return VALID_SIGNATURE
