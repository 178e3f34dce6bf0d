"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.  Every route
requires authentication.  Domain exceptions are caught and translated
into HTTP status codes.
"""

from __future__ import annotations

import structlog
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.orders.dtos import CreateOrderDTO, UpdateOrderStatusDTO
from modules.orders.exceptions import (
    EmptyCart,
    InactiveProduct,
    InvalidOrderStatus,
    OrderAccessDenied,
    OrderNotFound,
    ProductNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService

logger = structlog.get_logger(__name__)


def _not_found() -> Response:
    return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)


def _forbidden() -> Response:
    return Response(
        {"detail": "You do not have permission to access this order."},
        status=status.HTTP_403_FORBIDDEN,
    )


class OrderViewSet(GenericViewSet):
    """ViewSet for the requesting user's orders.

    Uses ``OrderService`` with injected repositories (DIP).
    """

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            cart_repository=CartDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Order placement gets its own throttle scope."""
        self.throttle_scope = "order_creation" if self.action == "create" else None
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders(self.request.user.pk)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Buy now: ``{"buy_now": true, "product_id": "...", "quantity": 2}``.
        Checkout: ``{"cart_id": "..."}``.
        """
        input_serializer = CreateOrderSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            dto = CreateOrderDTO(user_id=request.user.pk, **data)
        except (PydanticValidationError, ValueError) as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            order = self._service.create_order(dto)
        except ProductNotFound:
            return Response(
                {"detail": "Product not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except EmptyCart:
            return Response(
                {"detail": "Cart is empty."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except InactiveProduct as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except Exception:
            logger.exception("order.creation_failed", user_id=request.user.pk)
            return Response(
                {"detail": "Failed to create order."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/: the requesting user's orders, newest first."""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk or "", request.user.pk)
        except OrderNotFound:
            return _not_found()
        except OrderAccessDenied:
            return _forbidden()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/ with ``{"status": "...", "notes": "..."}``.

        Existence and ownership are checked before the payload.
        """
        try:
            self._service.get_order(pk or "", request.user.pk)
        except OrderNotFound:
            return _not_found()
        except OrderAccessDenied:
            return _forbidden()

        input_serializer = UpdateOrderStatusSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateOrderStatusDTO(**input_serializer.validated_data)
        except (PydanticValidationError, ValueError):
            return Response(
                {"detail": f"Invalid status '{request.data.get('status')}'."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            order = self._service.update_status(pk or "", request.user.pk, dto)
        except OrderNotFound:
            return _not_found()
        except OrderAccessDenied:
            return _forbidden()
        except InvalidOrderStatus as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(OrderSerializer(order).data)
