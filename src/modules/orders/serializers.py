"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.catalog.models import MAX_LINE_QUANTITY
from modules.catalog.serializers import ProductSerializer
from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation payload (buy-now or cart checkout)."""

    buy_now = serializers.BooleanField(required=False, default=False)
    product_id = serializers.UUIDField(required=False)
    quantity = serializers.IntegerField(
        min_value=1, max_value=MAX_LINE_QUANTITY, required=False, default=1
    )
    cart_id = serializers.CharField(required=False, max_length=64)

    def validate(self, attrs):
        if attrs.get("buy_now"):
            if not attrs.get("product_id"):
                raise serializers.ValidationError(
                    {"product_id": "This field is required for buy-now orders."}
                )
        elif not attrs.get("cart_id"):
            raise serializers.ValidationError(
                {"cart_id": "This field is required for cart checkout."}
            )
        return attrs


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Order line with its price snapshot and nested product."""

    product = ProductSerializer(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "quantity",
            "price",
            "subtotal",
            "product",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and history."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user_id",
            "status",
            "total_amount",
            "created_at",
            "updated_at",
            "items",
            "status_history",
        ]
        read_only_fields = fields
