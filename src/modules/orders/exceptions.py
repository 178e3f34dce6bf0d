"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class OrderAccessDenied(Exception):
    """The order belongs to another user."""


class InvalidOrderStatus(Exception):
    """Unknown status, or a transition the state machine forbids."""


class EmptyCart(Exception):
    """Checkout was requested for a cart with no items."""


class ProductNotFound(Exception):
    """The product of a buy-now order does not exist."""


class InactiveProduct(Exception):
    """A product in the order is not for sale."""
