"""Catalog repository interfaces.

``ICategoryRepository`` and ``IProductRepository`` extend ``IRepository``
with the slug look-ups used by the public routes and the text search
behind ``/products/search/``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import Category, Product


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for categories."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Category]":
        """List categories with optional filters."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Retrieve a category by slug."""


class IProductRepository(IRepository["Product"]):
    """Repository contract for products."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Product]:
        """Retrieve a product by slug."""

    @abstractmethod
    def list_by_category(self, category_id: str) -> List[Product]:
        """List the products of one category."""

    @abstractmethod
    def search(self, query: str) -> List[Product]:
        """Case-insensitive substring search over name and description."""
