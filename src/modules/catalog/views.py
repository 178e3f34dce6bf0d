"""Catalog API views.

Public, read-only endpoints for categories and products.  Look-ups use
slugs; domain exceptions are translated into 404 responses.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.catalog.exceptions import CategoryNotFound, ProductNotFound
from modules.catalog.filters import ProductFilter
from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)
from modules.catalog.serializers import CategorySerializer, ProductSerializer
from modules.catalog.services import CatalogService


def _catalog_service() -> CatalogService:
    return CatalogService(
        category_repository=CategoryDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


class CategoryViewSet(ListModelMixin, GenericViewSet):
    """``GET /categories/`` and ``GET /categories/{slug}/``."""

    permission_classes = [AllowAny]
    serializer_class = CategorySerializer
    lookup_field = "slug"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _catalog_service()

    def get_queryset(self):
        return self._service.list_categories()

    def retrieve(self, request: Request, slug: str | None = None) -> Response:
        """GET /api/v1/categories/{slug}/

        Returns the category together with its products.
        """
        try:
            category, products = self._service.get_category_with_products(slug or "")
        except CategoryNotFound:
            return Response(
                {"detail": "Category not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(
            {
                "category": CategorySerializer(category).data,
                "products": ProductSerializer(products, many=True).data,
            }
        )


class ProductViewSet(ListModelMixin, GenericViewSet):
    """``GET /products/``, ``/products/search/`` and ``/products/{slug}/``.

    Filtering (category, price range, name) is handled by ``ProductFilter``.
    """

    permission_classes = [AllowAny]
    serializer_class = ProductSerializer
    lookup_field = "slug"
    filterset_class = ProductFilter
    ordering_fields = ["name", "price", "created_at"]
    ordering = ["name"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _catalog_service()

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, slug: str | None = None) -> Response:
        """GET /api/v1/products/{slug}/"""
        try:
            product = self._service.get_product(slug or "")
        except ProductNotFound:
            return Response(
                {"detail": "Product not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/products/search/?q=...

        Unpaginated list; an empty or missing ``q`` returns ``[]``.
        """
        products = self._service.search_products(request.query_params.get("q"))
        return Response(ProductSerializer(products, many=True).data)
