from storefront.config import BASE_URL


def test_mount_returns_known_products_in_order(client):
    r = client.post("/api/v1/cart/mount", json={"ids": [2, 999, 1]})
    assert r.status_code == 200
    body = r.json()
    assert body["error"] is None
    assert [p["id"] for p in body["products"]] == [2, 1]
    assert body["products"][1]["image"] == f"{BASE_URL}/media/products/product_1_1.jpg"


def test_mount_rejects_invalid_ids(client):
    for payload in ({"ids": []}, {"ids": "1,2"}, {}):
        r = client.post("/api/v1/cart/mount", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid array of ids"}
    r = client.post("/api/v1/cart/mount", content=b"not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_shipping_quote(client):
    r = client.get("/api/v1/cart/shipping", params={"zipcode": "01001-000"})
    assert r.status_code == 200
    assert r.json() == {"error": None, "zipcode": "01001-000", "cost": 10, "days": 3}
    assert isinstance(r.json()["cost"], int)


def test_shipping_rejects_bad_zipcode(client):
    for params in ({"zipcode": "12"}, {}):
        r = client.get("/api/v1/cart/shipping", params=params)
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid ZIP Code"}


def test_finish_requires_authentication(client, order_repo):
    r = client.post("/api/v1/cart/finish", json={"cart": [{"productId": 1, "quantity": 1}], "addressId": 10})
    assert r.status_code == 401
    assert r.json() == {"error": "Access denied"}
    assert order_repo.orders == {}


def test_finish_creates_pending_order_and_returns_url(client, auth_headers, order_repo, gateway):
    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 1, "quantity": 2}, {"productId": 999, "quantity": 1}], "addressId": 10},
        headers=auth_headers,
    )
    assert r.status_code == 201
    assert r.json() == {"error": None, "url": gateway.url}
    assert order_repo.orders[1]["status"] == "pending"
    assert order_repo.orders[1]["total"] == "189.80"
    assert [i["product_id"] for i in order_repo.items[1]] == [1]


def test_finish_invalid_cart(client, auth_headers, order_repo):
    for payload in (
        {"cart": [], "addressId": 10},
        {"cart": [{"productId": 1, "quantity": 0}], "addressId": 10},
        {"cart": [{"productId": 1, "quantity": 10**12}], "addressId": 10},
        {"cart": [{"productId": 1, "quantity": 1}]},
    ):
        r = client.post("/api/v1/cart/finish", json=payload, headers=auth_headers)
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid cart"}
    assert order_repo.orders == {}


def test_finish_with_foreign_address(client, auth_headers, order_repo, gateway):
    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 1, "quantity": 1}], "addressId": 20},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid address"}
    assert order_repo.orders == {}
    assert gateway.links == []


def test_finish_when_payment_link_fails(client, auth_headers, order_repo, gateway):
    gateway.url = None
    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 1, "quantity": 1}], "addressId": 10},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Payment URL could not be created"}
    assert order_repo.orders[1]["status"] == "pending"


def test_finish_persistence_failure_is_generic_500(client, auth_headers, order_repo, gateway):
    order_repo.fail_writes = True
    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 1, "quantity": 1}], "addressId": 10},
        headers=auth_headers,
    )
    assert r.status_code == 500
    assert r.json() == {"error": "Something went wrong"}
    assert gateway.links == []


def test_finish_with_catalog_outage_creates_nothing(client, auth_headers, catalog_repo, order_repo, monkeypatch):
    from storefront.errors import PersistenceError

    def outage(ids):
        raise PersistenceError()
    monkeypatch.setattr(catalog_repo, "get_products_map", outage)

    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 1, "quantity": 1}], "addressId": 10},
        headers=auth_headers,
    )
    assert r.status_code == 500
    assert order_repo.orders == {}


def test_finish_with_only_unknown_products_opens_shipping_only_checkout(client, auth_headers, order_repo, gateway):
    r = client.post(
        "/api/v1/cart/finish",
        json={"cart": [{"productId": 999, "quantity": 1}], "addressId": 10},
        headers=auth_headers,
    )
    assert r.status_code == 201
    assert r.json() == {"error": None, "url": gateway.url}
    assert order_repo.orders[1]["total"] == "10.00"
    assert order_repo.items[1] == []
    assert gateway.links[0]["lines"] == []
