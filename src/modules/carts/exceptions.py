"""Cart domain exceptions."""

from __future__ import annotations


class CartItemNotFound(Exception):
    """The requested cart line does not exist."""


class ProductNotFound(Exception):
    """The product being added to the cart does not exist."""


class InactiveProduct(Exception):
    """The product being added to the cart is not for sale."""


class QuantityLimitExceeded(Exception):
    """The line would hold more units than a single line allows."""
