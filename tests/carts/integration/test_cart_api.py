"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from carts.api.errors import register_error_handlers
from carts.api.routes import cart_router
from carts.cart.cart import Cart, ItemStatus
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain

OWNER = {"tenantId": "T1", "userId": "U1"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    register_error_handlers(app)
    return TestClient(app)


def _add_item(client, product_id="P1", name="Widget", price=10.00, quantity=1, params=OWNER):
    response = client.post(
        "/api/cart/items",
        params=params,
        json={"productId": product_id, "name": name, "price": price, "quantity": quantity},
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealthEndpoint:
    def test_health(self, client):
        response = client.get("/api/cart/health")
        assert response.status_code == 200
        assert response.text == "Cart Service is running"


class TestAddItemEndpoint:
    def test_add_creates_cart(self, client):
        body = _add_item(client, quantity=2)

        assert body["tenantId"] == "T1"
        assert body["userId"] == "U1"
        assert body["itemCount"] == 2
        assert body["totalAmount"] == "20.00"
        assert body["currency"] == "USD"
        assert body["items"] == [
            {"productId": "P1", "name": "Widget", "price": "10.00", "quantity": 2, "subtotal": "20.00"}
        ]

        cart = current_domain.repository_for(Cart).get_for("T1", "U1")
        assert str(cart.id) == body["cartId"]

    def test_owner_from_headers(self, client):
        response = client.post(
            "/api/cart/items",
            headers={"X-Tenant-Id": "T7", "X-User-Id": "U7"},
            json={"productId": "P1", "name": "Widget", "price": 1.5, "quantity": 1},
        )
        assert response.status_code == 201
        assert response.json()["tenantId"] == "T7"

    def test_add_merges_same_product(self, client):
        _add_item(client, quantity=2)
        body = _add_item(client, quantity=3)

        assert body["itemCount"] == 5
        assert body["totalAmount"] == "50.00"
        assert len(body["items"]) == 1

    def test_quantity_upper_bound_accepted(self, client):
        body = _add_item(client, quantity=1000)
        assert body["itemCount"] == 1000

    def test_quantity_above_bound_rejected(self, client):
        response = client.post(
            "/api/cart/items",
            params=OWNER,
            json={"productId": "P1", "name": "Widget", "price": 10.0, "quantity": 1001},
        )
        assert response.status_code == 400
        assert "quantity" in response.json()["validationErrors"]
        assert current_domain.repository_for(Cart).find_for("T1", "U1") is None

    def test_non_positive_price_rejected(self, client):
        response = client.post(
            "/api/cart/items",
            params=OWNER,
            json={"productId": "P1", "name": "Widget", "price": 0, "quantity": 1},
        )
        assert response.status_code == 400
        assert "price" in response.json()["validationErrors"]

    def test_missing_fields_rejected(self, client):
        response = client.post("/api/cart/items", params=OWNER, json={"quantity": 1})
        assert response.status_code == 400
        errors = response.json()["validationErrors"]
        assert {"productId", "name", "price"} <= set(errors)

    def test_missing_owner_rejected(self, client):
        response = client.post(
            "/api/cart/items",
            json={"productId": "P1", "name": "Widget", "price": 10.0, "quantity": 1},
        )
        assert response.status_code == 400
        assert set(response.json()["validationErrors"]) == {"tenantId", "userId"}

    def test_merge_past_limit_rejected(self, client):
        _add_item(client, quantity=900)
        response = client.post(
            "/api/cart/items",
            params=OWNER,
            json={"productId": "P1", "name": "Widget", "price": 10.0, "quantity": 101},
        )
        assert response.status_code == 400
        assert "quantity" in response.json()["validationErrors"]


class TestViewCartEndpoint:
    def test_view_cart(self, client):
        _add_item(client, quantity=2)
        response = client.get("/api/cart", params=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert body["itemCount"] == 2
        assert body["updatedAt"] is not None

    def test_view_missing_cart(self, client):
        response = client.get("/api/cart", params=OWNER)
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"


class TestUpdateItemEndpoint:
    def test_update_quantity(self, client):
        _add_item(client, quantity=2)
        response = client.put("/api/cart/items/P1", params=OWNER, json={"quantity": 7})

        assert response.status_code == 200
        body = response.json()
        assert body["itemCount"] == 7
        assert body["totalAmount"] == "70.00"

    def test_update_missing_item(self, client):
        _add_item(client)
        response = client.put("/api/cart/items/P404", params=OWNER, json={"quantity": 2})
        assert response.status_code == 404
        assert "P404" in response.json()["message"]

    def test_update_missing_cart(self, client):
        response = client.put("/api/cart/items/P1", params=OWNER, json={"quantity": 2})
        assert response.status_code == 404

    def test_update_out_of_range(self, client):
        _add_item(client)
        response = client.put("/api/cart/items/P1", params=OWNER, json={"quantity": 0})
        assert response.status_code == 400


class TestRemoveItemEndpoint:
    def test_remove_item(self, client):
        _add_item(client, product_id="P1", quantity=2)
        _add_item(client, product_id="P2", price=4.25, quantity=2)

        response = client.delete("/api/cart/items/P1", params=OWNER)

        assert response.status_code == 200
        body = response.json()
        assert [item["productId"] for item in body["items"]] == ["P2"]
        assert body["totalAmount"] == "8.50"

        cart = current_domain.repository_for(Cart).get_for("T1", "U1")
        removed = cart.item_for("P1")
        assert removed.status == ItemStatus.DELETED.value

    def test_remove_twice(self, client):
        _add_item(client)
        assert client.delete("/api/cart/items/P1", params=OWNER).status_code == 200
        assert client.delete("/api/cart/items/P1", params=OWNER).status_code == 404


class TestClearCartEndpoint:
    def test_clear_cart(self, client):
        _add_item(client, product_id="P1")
        _add_item(client, product_id="P2")

        response = client.delete("/api/cart", params=OWNER)

        assert response.status_code == 204
        assert response.content == b""
        body = client.get("/api/cart", params=OWNER).json()
        assert body["items"] == []
        assert body["totalAmount"] == "0.00"

    def test_clear_twice(self, client):
        _add_item(client)
        assert client.delete("/api/cart", params=OWNER).status_code == 204
        assert client.delete("/api/cart", params=OWNER).status_code == 204

    def test_clear_missing_cart(self, client):
        response = client.delete("/api/cart", params=OWNER)
        assert response.status_code == 404


class TestWidgetScenario:
    def test_add_merge_remove_restore(self, client):
        body = _add_item(client, "P1", "Widget", 10.00, 2)
        assert (body["totalAmount"], body["itemCount"]) == ("20.00", 2)

        body = _add_item(client, "P1", "Widget", 10.00, 3)
        assert body["items"][0]["quantity"] == 5
        assert body["totalAmount"] == "50.00"

        body = client.delete("/api/cart/items/P1", params=OWNER).json()
        assert (body["totalAmount"], body["itemCount"]) == ("0.00", 0)
        cart = current_domain.repository_for(Cart).get_for("T1", "U1")
        assert cart.item_for("P1").status == ItemStatus.DELETED.value

        body = _add_item(client, "P1", "Widget-v2", 12.00, 1)
        assert body["items"] == [
            {"productId": "P1", "name": "Widget-v2", "price": "12.00", "quantity": 1, "subtotal": "12.00"}
        ]
        assert body["totalAmount"] == "12.00"
