"""Unit tests for order DTOs."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.catalog.models import MAX_LINE_QUANTITY
from modules.orders.dtos import CreateOrderDTO, UpdateOrderStatusDTO

pytestmark = pytest.mark.unit


class TestCreateOrderDTO:
    def test_buy_now_requires_product(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(user_id=1, buy_now=True)

    def test_checkout_requires_cart_id(self):
        with pytest.raises(ValidationError):
            CreateOrderDTO(user_id=1, cart_id="   ")

    @pytest.mark.parametrize("quantity", [0, MAX_LINE_QUANTITY + 1, 10**11])
    def test_rejects_out_of_range_quantity(self, quantity):
        with pytest.raises(ValidationError):
            CreateOrderDTO(
                user_id=1, buy_now=True, product_id=uuid4(), quantity=quantity
            )

    def test_valid_modes(self):
        buy_now = CreateOrderDTO(user_id=1, buy_now=True, product_id=uuid4())
        checkout = CreateOrderDTO(user_id=1, cart_id="abc")
        assert buy_now.quantity == 1
        assert checkout.buy_now is False


class TestUpdateOrderStatusDTO:
    def test_normalises_case(self):
        assert UpdateOrderStatusDTO(status=" Shipped ").status == "shipped"

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            UpdateOrderStatusDTO(status="teleported")

    def test_notes_default_empty(self):
        assert UpdateOrderStatusDTO(status="pending").notes == ""
