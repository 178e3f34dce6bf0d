"""Cart DTOs for the Service Layer.

Immutable Pydantic v2 contracts between the API views and
``CartService``.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.carts.models import CART_ID_MAX_LENGTH
from modules.catalog.models import MAX_LINE_QUANTITY


class AddCartItemDTO(BaseModel):
    """Add ``quantity`` units of a product to the cart ``cart_id``.

    ``cart_id`` is kept verbatim: it is the same key the cart is later
    read and checked out by.
    """

    model_config = ConfigDict(frozen=True)

    cart_id: str
    product_id: UUID
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)

    @field_validator("cart_id")
    @classmethod
    def cart_id_must_be_valid(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Cart ID must not be empty.")
        if len(v) > CART_ID_MAX_LENGTH:
            raise ValueError(f"Cart ID must be at most {CART_ID_MAX_LENGTH} characters.")
        return v


class UpdateCartItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    quantity: int = Field(ge=1, le=MAX_LINE_QUANTITY)
