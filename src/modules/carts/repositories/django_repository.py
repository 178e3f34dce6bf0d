"""Django ORM implementation of the Cart repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from modules.carts.models import CartItem
from modules.carts.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[CartItem]:
        """Retrieve a cart item by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                CartItem.objects.select_related("product__category")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> "QuerySet[CartItem]":
        queryset = CartItem.objects.select_related("product__category")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_items(self, cart_id: str, for_update: bool = False) -> List[CartItem]:
        queryset = self.list({"cart_id": cart_id})
        if for_update:
            queryset = queryset.select_for_update()
        return list(queryset)

    def get_item(
        self, cart_id: str, product_id: str, for_update: bool = False
    ) -> Optional[CartItem]:
        queryset = CartItem.objects.select_related("product")
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.filter(cart_id=cart_id, product_id=product_id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def save(self, entity: CartItem) -> CartItem:
        entity.save()
        logger.info(
            "cart_item.saved",
            cart_item_id=str(entity.id),
            cart_id=entity.cart_id,
            quantity=entity.quantity,
        )
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a cart item by ID.

        Returns ``False`` if no item exists with the given ID.
        """
        try:
            deleted, _ = CartItem.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("cart_item.deleted", cart_item_id=str(id))
        return bool(deleted)

    @transaction.atomic
    def clear(self, cart_id: str) -> int:
        deleted, _ = CartItem.objects.filter(cart_id=cart_id).delete()
        logger.info("cart.cleared", cart_id=cart_id, removed=deleted)
        return deleted
