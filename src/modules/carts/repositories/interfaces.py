"""Cart repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.carts.models import CartItem


class ICartRepository(IRepository["CartItem"]):
    """Repository contract for cart line items."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[CartItem]":
        """List cart items with optional filters."""

    @abstractmethod
    def list_items(self, cart_id: str, for_update: bool = False) -> List[CartItem]:
        """Return the items of one cart with their products loaded.

        ``for_update`` locks the rows until the surrounding transaction ends.
        """

    @abstractmethod
    def get_item(
        self, cart_id: str, product_id: str, for_update: bool = False
    ) -> Optional[CartItem]:
        """Return the line for ``product_id`` in ``cart_id`` if present."""

    @abstractmethod
    def clear(self, cart_id: str) -> int:
        """Delete every item of a cart and return how many were removed."""
