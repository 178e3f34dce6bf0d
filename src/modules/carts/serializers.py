"""Cart DRF serializers for API input/output."""

from __future__ import annotations

from rest_framework import serializers

from modules.carts.models import CartItem
from modules.catalog.models import MAX_LINE_QUANTITY
from modules.catalog.serializers import ProductSerializer

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class AddCartItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(
        min_value=1, max_value=MAX_LINE_QUANTITY, required=False, default=1
    )


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class CartItemSerializer(serializers.ModelSerializer):
    """Cart line with its nested product."""

    product = ProductSerializer(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "cart_id",
            "product_id",
            "quantity",
            "product",
            "subtotal",
            "created_at",
        ]
        read_only_fields = fields


class CartSerializer(serializers.Serializer):
    """Whole-cart payload: ``{cart_id, items, total_amount}``."""

    cart_id = serializers.CharField()
    items = CartItemSerializer(many=True)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
