"""Order service layer (Use Cases).

Orchestrates order placement, look-up and status management.  Every
write use case is atomic: the service defines the unit-of-work boundary,
so a failed checkout leaves no order, no items, and the cart untouched.

Business rules enforced:
- Orders are placed either from a single product ("buy now") or from
  every line of a cart (checkout); an empty cart cannot be checked out.
- Only active products can be ordered.
- ``total_amount`` is the sum of ``price * quantity`` over the lines, with
  each line's price snapshotted from the catalog.
- Only the owner of an order may read it or change its status.
- Status transitions are validated against the state machine and every
  change is recorded in the status history.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, List, Tuple

import structlog
from django.db import transaction

from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import (
    EmptyCart,
    InactiveProduct,
    InvalidOrderStatus,
    OrderAccessDenied,
    OrderNotFound,
    ProductNotFound,
)

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.carts.repositories.interfaces import ICartRepository
    from modules.catalog.models import Product
    from modules.catalog.repositories.interfaces import IProductRepository
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderStatusDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

OrderLine = Tuple["Product", int]


def order_total(lines: Iterable[OrderLine]) -> Decimal:
    """Sum of ``product.price * quantity`` over ``(product, quantity)`` pairs."""
    return sum(
        (Decimal(product.price) * quantity for product, quantity in lines),
        Decimal("0.00"),
    )


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        cart_repository: ICartRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._cart_repo = cart_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Place an order for ``dto.user_id``.

        Steps:
        1. Resolve the lines: the buy-now product, or the cart's items
           locked so a concurrent checkout of the same cart waits.
        2. Validate every product is active.
        3. Persist order + items (price snapshot, total aggregation).
        4. Queue ``OrderCreated`` in the outbox and record initial history.
        5. On checkout, empty the cart.

        Raises:
            ProductNotFound: the buy-now product does not exist.
            EmptyCart: the cart to check out has no items.
            InactiveProduct: a product is not for sale.
        """
        log = logger.bind(user_id=dto.user_id, buy_now=dto.buy_now)
        log.info("order.creation_started")

        lines = self._resolve_lines(dto)
        for product, _ in lines:
            if not product.is_active:
                raise InactiveProduct(f"Product {product.slug} is inactive.")

        total = order_total(lines)
        order = self._order_repo.create(
            {
                "user_id": dto.user_id,
                "status": OrderStatus.PENDING,
                "items": [
                    {
                        "product_id": product.id,
                        "quantity": quantity,
                        "price": product.price,
                    }
                    for product, quantity in lines
                ],
            }
        )

        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                user_id=dto.user_id,
                total_amount=str(total),
            )
        )
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.PENDING,
            notes="Order created",
            user_id=dto.user_id,
        )

        if not dto.buy_now:
            self._cart_repo.clear(dto.cart_id)

        log.info(
            "order.created",
            order_id=str(order.id),
            item_count=len(lines),
            total_amount=str(total),
        )

        # Re-fetch with prefetch for output
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(
        self, order_id: str, user_id: Any, dto: UpdateOrderStatusDTO
    ) -> Order:
        """Transition an order to a new status.

        Acquires a row-level lock on the order before validating the
        transition, preventing concurrent mutations.

        Raises:
            OrderNotFound: order does not exist.
            OrderAccessDenied: order belongs to another user.
            InvalidOrderStatus: transition is not allowed.
        """
        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not order.is_owned_by(user_id):
            logger.warning("order.access_denied", order_id=str(order_id), user_id=user_id)
            raise OrderAccessDenied(f"Order {order_id} belongs to another user.")

        log = logger.bind(
            order_id=str(order_id),
            current_status=order.status,
            new_status=dto.status,
        )

        if not order.can_transition_to(dto.status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {order.status} to {dto.status}."
            )

        old_status = order.status
        order.status = dto.status
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=dto.status,
            )
        )
        self._order_repo.save(order)

        self._order_repo.add_history(
            order_id=order.id,
            status=dto.status,
            notes=dto.notes,
            old_status=old_status,
            user_id=user_id,
        )

        log.info("order.status_updated")
        return self._order_repo.get_by_id(str(order.id)) or order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str, user_id: Any) -> Order:
        """Retrieve one of ``user_id``'s orders.

        Raises:
            OrderNotFound: the order does not exist.
            OrderAccessDenied: the order belongs to another user.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not order.is_owned_by(user_id):
            logger.warning("order.access_denied", order_id=str(order_id), user_id=user_id)
            raise OrderAccessDenied(f"Order {order_id} belongs to another user.")
        return order

    def list_orders(self, user_id: Any) -> QuerySet[Order]:
        """Return ``user_id``'s orders, newest first."""
        return self._order_repo.list_for_user(user_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve_lines(self, dto: CreateOrderDTO) -> List[OrderLine]:
        if dto.buy_now:
            product = self._product_repo.get_by_id(str(dto.product_id))
            if not product:
                raise ProductNotFound(f"Product {dto.product_id} not found.")
            return [(product, dto.quantity)]

        cart_items = self._cart_repo.list_items(dto.cart_id, for_update=True)
        if not cart_items:
            raise EmptyCart(f"Cart '{dto.cart_id}' is empty.")
        return [(item.product, item.quantity) for item in cart_items]
