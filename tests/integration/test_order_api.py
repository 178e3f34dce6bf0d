"""Integration tests for the order endpoints.

Covers placement (buy-now and checkout), listing, retrieval with
ownership checks and status transitions.
"""

from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.carts.models import CartItem
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.services import OrderService

pytestmark = pytest.mark.integration

ORDERS_URL = "/api/v1/orders/"
CART_ID = "cart-for-checkout"


def _detail_url(order_id) -> str:
    return f"{ORDERS_URL}{order_id}/"


def _status_url(order_id) -> str:
    return f"{ORDERS_URL}{order_id}/status/"


@pytest.fixture()
def filled_cart(product, second_product):
    CartItem.objects.create(cart_id=CART_ID, product=product, quantity=2)
    CartItem.objects.create(cart_id=CART_ID, product=second_product, quantity=1)
    return CART_ID


@pytest.fixture()
def placed_order(auth_client, product):
    response = auth_client.post(
        ORDERS_URL,
        {"buy_now": True, "product_id": str(product.id), "quantity": 1},
        format="json",
    )
    assert response.status_code == 201
    return response.json()


class TestAuthentication:
    def test_orders_require_authentication(self, api_client):
        assert api_client.get(ORDERS_URL).status_code == 401
        assert api_client.post(ORDERS_URL, {}, format="json").status_code == 401


class TestCreateOrder:
    def test_buy_now(self, auth_client, user, product):
        response = auth_client.post(
            ORDERS_URL,
            {"buy_now": True, "product_id": str(product.id), "quantity": 3},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == user.pk
        assert data["status"] == "pending"
        assert data["total_amount"] == "30.00"
        assert data["order_number"].startswith("ORD-")
        assert len(data["items"]) == 1
        item = data["items"][0]
        assert item["product_id"] == str(product.id)
        assert item["quantity"] == 3
        assert item["price"] == "10.00"
        assert item["subtotal"] == "30.00"
        assert item["product"]["slug"] == "clean-code"
        assert [h["new_status"] for h in data["status_history"]] == ["pending"]

    def test_checkout_orders_cart_and_empties_it(self, auth_client, filled_cart):
        response = auth_client.post(ORDERS_URL, {"cart_id": filled_cart}, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["total_amount"] == "45.50"
        assert len(data["items"]) == 2
        assert not CartItem.objects.filter(cart_id=filled_cart).exists()

    def test_empty_cart_returns_400(self, auth_client):
        response = auth_client.post(ORDERS_URL, {"cart_id": "empty"}, format="json")

        assert response.status_code == 400
        assert response.json() == {"detail": "Cart is empty."}
        assert not Order.objects.exists()

    def test_unknown_product_returns_404(self, auth_client):
        response = auth_client.post(
            ORDERS_URL, {"buy_now": True, "product_id": str(uuid4())}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "Product not found."}

    def test_inactive_product_returns_400(self, auth_client, inactive_product):
        response = auth_client.post(
            ORDERS_URL,
            {"buy_now": True, "product_id": str(inactive_product.id)},
            format="json",
        )

        assert response.status_code == 400
        assert not Order.objects.exists()

    @pytest.mark.parametrize(
        "payload",
        [
            {"buy_now": True},
            {},
            {"buy_now": True, "product_id": "00000000-0000-0000-0000-000000000000", "quantity": 0},
        ],
    )
    def test_invalid_payload_returns_400(self, auth_client, payload):
        response = auth_client.post(ORDERS_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    @pytest.mark.parametrize("quantity", [100, 10**11])
    def test_buy_now_quantity_over_limit_returns_400(self, auth_client, product, quantity):
        response = auth_client.post(
            ORDERS_URL,
            {"buy_now": True, "product_id": str(product.id), "quantity": quantity},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert not Order.objects.exists()

    def test_unexpected_failure_returns_500(self, auth_client, filled_cart):
        with patch.object(
            OrderService, "create_order", side_effect=RuntimeError("db exploded")
        ):
            response = auth_client.post(ORDERS_URL, {"cart_id": filled_cart}, format="json")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create order."}
        assert CartItem.objects.filter(cart_id=filled_cart).count() == 2


class TestListOrders:
    def test_lists_only_own_orders(self, auth_client, other_client, product):
        other_client.post(
            ORDERS_URL, {"buy_now": True, "product_id": str(product.id)}, format="json"
        )
        mine = auth_client.post(
            ORDERS_URL, {"buy_now": True, "product_id": str(product.id)}, format="json"
        ).json()

        response = auth_client.get(ORDERS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["results"][0]["id"] == mine["id"]

    def test_newest_first(self, auth_client, product):
        payload = {"buy_now": True, "product_id": str(product.id)}
        first = auth_client.post(ORDERS_URL, payload, format="json").json()
        second = auth_client.post(ORDERS_URL, payload, format="json").json()

        results = auth_client.get(ORDERS_URL).json()["results"]

        assert [o["id"] for o in results] == [second["id"], first["id"]]

    def test_filter_by_status(self, auth_client, placed_order, product):
        auth_client.patch(_status_url(placed_order["id"]), {"status": "cancelled"}, format="json")
        auth_client.post(
            ORDERS_URL, {"buy_now": True, "product_id": str(product.id)}, format="json"
        )

        results = auth_client.get(ORDERS_URL, {"status": "cancelled"}).json()["results"]

        assert [o["id"] for o in results] == [placed_order["id"]]


class TestRetrieveOrder:
    def test_owner_can_read(self, auth_client, placed_order):
        response = auth_client.get(_detail_url(placed_order["id"]))

        assert response.status_code == 200
        assert response.json()["id"] == placed_order["id"]

    def test_other_user_gets_403(self, other_client, placed_order):
        response = other_client.get(_detail_url(placed_order["id"]))

        assert response.status_code == 403

    @pytest.mark.parametrize("order_id", ["not-a-uuid", str(uuid4())])
    def test_missing_order_returns_404(self, auth_client, order_id):
        response = auth_client.get(_detail_url(order_id))

        assert response.status_code == 404
        assert response.json() == {"detail": "Order not found."}


class TestUpdateStatus:
    def test_valid_transition(self, auth_client, placed_order):
        response = auth_client.patch(
            _status_url(placed_order["id"]),
            {"status": "processing", "notes": "Packed"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "processing"
        assert [h["new_status"] for h in data["status_history"]] == [
            "pending",
            "processing",
        ]
        assert data["status_history"][-1]["old_status"] == "pending"
        assert data["status_history"][-1]["notes"] == "Packed"

    def test_full_lifecycle(self, auth_client, placed_order):
        for status in ("processing", "shipped", "delivered"):
            response = auth_client.patch(
                _status_url(placed_order["id"]), {"status": status}, format="json"
            )
            assert response.status_code == 200
        assert Order.objects.get(id=placed_order["id"]).status == "delivered"

    def test_invalid_transition_returns_400(self, auth_client, placed_order):
        response = auth_client.patch(
            _status_url(placed_order["id"]), {"status": "delivered"}, format="json"
        )

        assert response.status_code == 400
        assert OrderStatusHistory.objects.filter(order_id=placed_order["id"]).count() == 1

    def test_unknown_status_returns_400(self, auth_client, placed_order):
        response = auth_client.patch(
            _status_url(placed_order["id"]), {"status": "teleported"}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid status 'teleported'."}

    def test_other_user_gets_403(self, other_client, placed_order):
        response = other_client.patch(
            _status_url(placed_order["id"]), {"status": "cancelled"}, format="json"
        )

        assert response.status_code == 403
        assert Order.objects.get(id=placed_order["id"]).status == "pending"

    def test_missing_order_returns_404(self, auth_client):
        response = auth_client.patch(_status_url(uuid4()), {"status": "cancelled"}, format="json")

        assert response.status_code == 404

    def test_total_is_not_recomputed_on_status_change(self, auth_client, placed_order):
        response = auth_client.patch(
            _status_url(placed_order["id"]), {"status": "cancelled"}, format="json"
        )

        assert Decimal(response.json()["total_amount"]) == Decimal("10.00")
