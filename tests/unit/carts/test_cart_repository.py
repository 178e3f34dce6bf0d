"""Unit tests for the cart repository's per-cart operations."""

from __future__ import annotations

import pytest

from modules.carts.models import CartItem
from modules.carts.repositories.django_repository import CartDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return CartDjangoRepository()


class TestCartRepository:
    def test_get_item_by_cart_and_product(self, repo, product):
        item = CartItem.objects.create(cart_id="abc", product=product, quantity=1)

        assert repo.get_item("abc", str(product.id)) == item
        assert repo.get_item("other", str(product.id)) is None

    def test_list_items_returns_only_that_cart(self, repo, product, second_product):
        first = CartItem.objects.create(cart_id="abc", product=product)
        second = CartItem.objects.create(cart_id="abc", product=second_product)
        CartItem.objects.create(cart_id="keep", product=product)

        assert repo.list_items("abc") == [first, second]

    def test_list_items_for_update_returns_same_lines(self, repo, product):
        item = CartItem.objects.create(cart_id="abc", product=product, quantity=3)

        locked = repo.list_items("abc", for_update=True)

        assert locked == [item]
        assert locked[0].product.category.slug == "books"

    def test_clear_removes_only_that_cart(self, repo, product, second_product):
        CartItem.objects.create(cart_id="abc", product=product)
        CartItem.objects.create(cart_id="abc", product=second_product)
        CartItem.objects.create(cart_id="keep", product=product)

        assert repo.clear("abc") == 2
        assert list(CartItem.objects.values_list("cart_id", flat=True)) == ["keep"]
