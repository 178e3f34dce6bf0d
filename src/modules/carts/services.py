"""Cart service layer (Use Cases).

Guest carts keyed by an opaque ``cart_id``.  The service validates the
product being added and merges repeated additions of the same product
into a single line.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List

import structlog
from django.db import IntegrityError, transaction

from modules.carts.exceptions import (
    CartItemNotFound,
    InactiveProduct,
    ProductNotFound,
    QuantityLimitExceeded,
)
from modules.carts.models import CartItem
from modules.catalog.models import MAX_LINE_QUANTITY

if TYPE_CHECKING:
    from modules.carts.dtos import AddCartItemDTO, UpdateCartItemDTO
    from modules.carts.repositories.interfaces import ICartRepository
    from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def cart_total(items: Iterable[CartItem]) -> Decimal:
    """Sum of ``product.price * quantity`` over the given lines."""
    return sum((item.subtotal for item in items), Decimal("0.00"))


class CartService:
    """Application service for cart use-cases."""

    def __init__(
        self,
        cart_repository: ICartRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._cart_repo = cart_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_cart(self, cart_id: str) -> List[CartItem]:
        """Return the cart's items; an unknown cart is simply empty."""
        return self._cart_repo.list_items(cart_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def add_item(self, dto: AddCartItemDTO) -> CartItem:
        """Add a product to the cart, merging with an existing line.

        A concurrent request may insert the same line between the look-up
        and the insert; the unique constraint then fails inside a savepoint
        and the quantity is merged into the line that won.

        Raises:
            ProductNotFound: the product does not exist.
            InactiveProduct: the product is not for sale.
            QuantityLimitExceeded: the merged line would exceed
                ``MAX_LINE_QUANTITY``.
        """
        log = logger.bind(cart_id=dto.cart_id, product_id=str(dto.product_id))

        product = self._product_repo.get_by_id(str(dto.product_id))
        if not product:
            raise ProductNotFound(f"Product {dto.product_id} not found.")
        if not product.is_active:
            raise InactiveProduct(f"Product {dto.product_id} is inactive.")

        item = self._cart_repo.get_item(dto.cart_id, str(product.id), for_update=True)
        if item:
            item = self._merge(item, dto.quantity)
        else:
            try:
                with transaction.atomic():
                    item = self._cart_repo.save(
                        CartItem(cart_id=dto.cart_id, product=product, quantity=dto.quantity)
                    )
            except IntegrityError:
                log.info("cart.item_insert_conflict")
                item = self._cart_repo.get_item(
                    dto.cart_id, str(product.id), for_update=True
                )
                if not item:
                    raise
                item = self._merge(item, dto.quantity)

        log.info("cart.item_added", cart_item_id=str(item.id), quantity=item.quantity)
        return item

    @transaction.atomic
    def update_item_quantity(self, item_id: str, dto: UpdateCartItemDTO) -> CartItem:
        """Set the quantity of a cart line.

        Raises:
            CartItemNotFound: the line does not exist.
        """
        item = self._cart_repo.get_by_id(item_id)
        if not item:
            raise CartItemNotFound(f"Cart item {item_id} not found.")

        item.quantity = dto.quantity
        item = self._cart_repo.save(item)
        logger.info(
            "cart.item_quantity_updated",
            cart_item_id=str(item_id),
            quantity=dto.quantity,
        )
        return item

    def remove_item(self, item_id: str) -> bool:
        """Remove a cart line.  Unknown IDs are a no-op returning ``False``."""
        removed = self._cart_repo.delete(item_id)
        logger.info("cart.item_removed", cart_item_id=str(item_id), removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _merge(self, item: CartItem, quantity: int) -> CartItem:
        merged = item.quantity + quantity
        if merged > MAX_LINE_QUANTITY:
            raise QuantityLimitExceeded(
                f"A cart line can hold at most {MAX_LINE_QUANTITY} units."
            )
        item.quantity = merged
        return self._cart_repo.save(item)
