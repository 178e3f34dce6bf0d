"""Catalog service layer (Use Cases).

Read-side use cases for categories and products.  Catalog writes go
through Django admin and the ``seed_data`` command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import structlog

from modules.catalog.exceptions import CategoryNotFound, ProductNotFound

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.catalog.models import Category, Product
    from modules.catalog.repositories.interfaces import (
        ICategoryRepository,
        IProductRepository,
    )

logger = structlog.get_logger(__name__)


class CatalogService:
    """Application service for catalog browsing.

    Receives both repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        category_repository: ICategoryRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._category_repo = category_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self) -> QuerySet[Category]:
        return self._category_repo.list()

    def get_category(self, slug: str) -> Category:
        """Raises:
            CategoryNotFound: no category has this slug.
        """
        category = self._category_repo.get_by_slug(slug)
        if not category:
            raise CategoryNotFound(f"Category '{slug}' not found.")
        return category

    def get_category_with_products(self, slug: str) -> Tuple[Category, List[Product]]:
        """Return a category together with its products.

        Raises:
            CategoryNotFound: no category has this slug.
        """
        category = self.get_category(slug)
        products = self._product_repo.list_by_category(str(category.id))
        logger.info(
            "category.retrieved",
            slug=slug,
            product_count=len(products),
        )
        return category, products

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Product]:
        return self._product_repo.list(filters)

    def list_products_by_category(self, category_id: str) -> List[Product]:
        return self._product_repo.list_by_category(category_id)

    def get_product(self, slug: str) -> Product:
        """Raises:
            ProductNotFound: no product has this slug.
        """
        product = self._product_repo.get_by_slug(slug)
        if not product:
            raise ProductNotFound(f"Product '{slug}' not found.")
        return product

    def get_product_by_id(self, id: str) -> Product:
        """Raises:
            ProductNotFound: no product has this ID.
        """
        product = self._product_repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def search_products(self, query: Optional[str]) -> List[Product]:
        """Search products by name or description.

        A missing or blank query yields an empty list without hitting
        the repository.
        """
        if not query or not query.strip():
            return []
        return self._product_repo.search(query)
