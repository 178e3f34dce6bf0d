"""Cart URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.carts.views import CartItemViewSet, CartViewSet

router = DefaultRouter(trailing_slash=True)
router.register("carts", CartViewSet, basename="cart")
router.register("cart-items", CartItemViewSet, basename="cart-item")

urlpatterns = router.urls
