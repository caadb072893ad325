import pytest

from conftest import auth_header
from vibecommerce.models.cart_item import CartItem
from vibecommerce.models.product import Product
from vibecommerce.services.cart_service import cart_service

ADMIN_CALLS = [
    ("get", "/api/admin/stats", None),
    ("get", "/api/admin/users", None),
    ("get", "/api/admin/orders", None),
    ("put", "/api/admin/orders/1/status", {"status": "shipped"}),
    ("post", "/api/admin/products", {"name": "Lamp", "price": 5, "stock": 1}),
    ("put", "/api/admin/products/1", {"name": "Lamp"}),
    ("delete", "/api/admin/products/1", None),
]


def call(client, method, url, body, headers=None):
    kwargs = {"headers": headers or {}}
    if body is not None:
        kwargs["json"] = body
    return getattr(client, method)(url, **kwargs)


@pytest.mark.parametrize("method, url, body", ADMIN_CALLS)
def test_non_admin_is_forbidden(client, user, method, url, body):
    response = call(client, method, url, body, auth_header(user))

    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


@pytest.mark.parametrize("method, url, body", ADMIN_CALLS)
def test_anonymous_is_unauthenticated(client, method, url, body):
    assert call(client, method, url, body).status_code == 401


def test_role_in_token_is_trusted_until_expiry(client, db, admin):
    headers = auth_header(admin)
    admin.role = "user"
    db.commit()

    assert client.get("/api/admin/stats", headers=headers).status_code == 200


def test_stats(client, admin, user):
    items = [{"name": "Widget", "price": 12.5, "quantity": 2}]
    body = {"customerName": "Alice", "customerEmail": "alice@example.com", "cartItems": items}
    first = client.post("/api/checkout", json=body, headers=auth_header(user)).json()
    client.post("/api/checkout", json=body, headers=auth_header(user))
    client.put(
        f"/api/admin/orders/{first['orderId']}/status", json={"status": "shipped"}, headers=auth_header(admin)
    )

    stats = client.get("/api/admin/stats", headers=auth_header(admin)).json()

    assert stats == {"totalUsers": 2, "totalOrders": 2, "totalRevenue": 50.0, "pendingOrders": 1}


def test_list_users_hides_password_hash(client, admin, user):
    users = client.get("/api/admin/users", headers=auth_header(admin)).json()

    assert {u["email"] for u in users} == {admin.email, user.email}
    assert all("hashed_password" not in u for u in users)


def test_order_status_updates(client, admin, user):
    items = [{"name": "Widget", "price": 1, "quantity": 1}]
    body = {"customerName": "Alice", "customerEmail": "alice@example.com", "cartItems": items}
    order_id = client.post("/api/checkout", json=body, headers=auth_header(user)).json()["orderId"]
    headers = auth_header(admin)

    ok = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "delivered"}, headers=headers)
    assert ok.status_code == 200
    assert ok.json()["status"] == "delivered"

    invalid = client.put(f"/api/admin/orders/{order_id}/status", json={"status": "teleported"}, headers=headers)
    assert invalid.status_code == 400

    missing = client.put("/api/admin/orders/999/status", json={"status": "shipped"}, headers=headers)
    assert missing.status_code == 404

    orders = client.get("/api/admin/orders", headers=headers).json()
    assert [o["status"] for o in orders] == ["delivered"]


def test_product_crud(client, admin):
    headers = auth_header(admin)

    created = client.post(
        "/api/admin/products",
        json={"name": "Lamp", "price": 44.99, "description": "LED", "category": "Home", "stock": 3},
        headers=headers,
    )
    assert created.status_code == 201
    product_id = created.json()["id"]

    updated = client.put(f"/api/admin/products/{product_id}", json={"stock": 7}, headers=headers)
    assert updated.status_code == 200
    product = client.get(f"/api/products/{product_id}").json()
    assert product["stock"] == 7
    assert product["price"] == 44.99
    assert product["name"] == "Lamp"

    negative = client.put(f"/api/admin/products/{product_id}", json={"price": -1}, headers=headers)
    assert negative.status_code == 400

    assert client.delete(f"/api/admin/products/{product_id}", headers=headers).status_code == 200
    assert client.get(f"/api/products/{product_id}").status_code == 404
    assert client.delete(f"/api/admin/products/{product_id}", headers=headers).status_code == 404


def test_deleting_product_removes_cart_lines(client, db, admin, user, make_product):
    product = make_product()
    cart_service.add_item(db, user.id, product.id, 2)

    response = client.delete(f"/api/admin/products/{product.id}", headers=auth_header(admin))

    assert response.status_code == 200
    db.expire_all()
    assert db.query(Product).count() == 0
    assert db.query(CartItem).count() == 0
    assert client.get("/api/cart/", headers=auth_header(user)).json()["itemCount"] == 0
