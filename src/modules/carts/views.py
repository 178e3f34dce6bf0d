"""Cart API views.

Guest carts need no authentication: whoever knows the ``cart_id`` owns
the cart.  Domain exceptions are translated into HTTP status codes.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.carts.dtos import AddCartItemDTO, UpdateCartItemDTO
from modules.carts.exceptions import (
    CartItemNotFound,
    InactiveProduct,
    ProductNotFound,
    QuantityLimitExceeded,
)
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.carts.serializers import (
    AddCartItemSerializer,
    CartItemSerializer,
    CartSerializer,
    UpdateCartItemSerializer,
)
from modules.carts.services import CartService, cart_total
from modules.catalog.repositories.django_repository import ProductDjangoRepository


def _cart_service() -> CartService:
    return CartService(
        cart_repository=CartDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


class CartViewSet(GenericViewSet):
    """``GET /carts/{cart_id}/`` and ``POST /carts/{cart_id}/items/``."""

    permission_classes = [AllowAny]
    serializer_class = CartSerializer
    lookup_field = "cart_id"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _cart_service()

    def retrieve(self, request: Request, cart_id: str | None = None) -> Response:
        """GET /api/v1/carts/{cart_id}/"""
        items = self._service.get_cart(cart_id or "")
        out = CartSerializer(
            {"cart_id": cart_id, "items": items, "total_amount": cart_total(items)}
        )
        return Response(out.data)

    @action(detail=True, methods=["post"], url_path="items")
    def add_item(self, request: Request, cart_id: str | None = None) -> Response:
        """POST /api/v1/carts/{cart_id}/items/

        Body: ``{"product_id": "<uuid>", "quantity": 1}``.
        """
        input_serializer = AddCartItemSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(
                {"detail": "Invalid cart item data."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        data = input_serializer.validated_data
        try:
            dto = AddCartItemDTO(
                cart_id=cart_id or "",
                product_id=data["product_id"],
                quantity=data["quantity"],
            )
        except (PydanticValidationError, ValueError):
            return Response(
                {"detail": "Invalid cart item data."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            item = self._service.add_item(dto)
        except ProductNotFound:
            return Response(
                {"detail": "Product not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except (InactiveProduct, QuantityLimitExceeded) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        out = CartItemSerializer(item)
        return Response(out.data, status=status.HTTP_201_CREATED)


class CartItemViewSet(GenericViewSet):
    """``PATCH /cart-items/{id}/`` and ``DELETE /cart-items/{id}/``."""

    permission_classes = [AllowAny]
    serializer_class = CartItemSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _cart_service()

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/cart-items/{pk}/ with ``{"quantity": n}``, n >= 1."""
        input_serializer = UpdateCartItemSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        dto = UpdateCartItemDTO(quantity=input_serializer.validated_data["quantity"])

        try:
            item = self._service.update_item_quantity(pk or "", dto)
        except CartItemNotFound:
            return Response(
                {"detail": "Cart item not found."},
                status=status.HTTP_404_NOT_FOUND,
            )

        return Response(CartItemSerializer(item).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/cart-items/{pk}/ (idempotent)."""
        self._service.remove_item(pk or "")
        return Response(status=status.HTTP_204_NO_CONTENT)
