"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order placement (buy-now or cart checkout).
- ``UpdateOrderStatusDTO``: input for a status transition.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.catalog.models import MAX_LINE_QUANTITY
from modules.orders.constants import OrderStatus


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Two modes:
    - ``buy_now=True``: order ``quantity`` units of ``product_id``.
    - ``buy_now=False``: check out every line of ``cart_id``.
    """

    model_config = ConfigDict(frozen=True)

    user_id: Any
    buy_now: bool = False
    product_id: Optional[UUID] = None
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)
    cart_id: Optional[str] = None

    @model_validator(mode="after")
    def mode_fields_present(self):
        if self.buy_now and self.product_id is None:
            raise ValueError("product_id is required for buy-now orders.")
        if not self.buy_now and not (self.cart_id and self.cart_id.strip()):
            raise ValueError("cart_id is required for cart checkout.")
        return self


class UpdateOrderStatusDTO(BaseModel):
    """Immutable DTO for status transitions.  ``status`` is normalised to lowercase."""

    model_config = ConfigDict(frozen=True)

    status: str
    notes: str = ""

    @field_validator("status")
    @classmethod
    def status_must_be_known(cls, v: str) -> str:
        value = (v or "").strip().lower()
        if value not in OrderStatus.values:
            raise ValueError(f"Unknown order status '{v}'.")
        return value
