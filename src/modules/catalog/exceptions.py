"""Catalog domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
HTTP responses.
"""

from __future__ import annotations


class CategoryNotFound(Exception):
    """No category matches the requested slug or ID."""


class ProductNotFound(Exception):
    """No product matches the requested slug or ID."""
