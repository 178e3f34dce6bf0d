"""Guest cart line items.

A cart has no row of its own: it is the set of ``CartItem`` rows sharing
a client-chosen ``cart_id``.  Each product appears at most once per cart;
adding it again increases the line quantity.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.catalog.models import MAX_LINE_QUANTITY
from modules.core.models import BaseModel

CART_ID_MAX_LENGTH = 64


class CartItem(BaseModel):
    cart_id = models.CharField(max_length=CART_ID_MAX_LENGTH, db_index=True)
    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(MAX_LINE_QUANTITY)],
    )

    class Meta:
        db_table = "cart_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["cart_id", "product"],
                name="cart_items_unique_product_per_cart",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="cart_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    def __str__(self) -> str:
        return f"{self.cart_id}: {self.product_id} x{self.quantity}"
