"""Unit tests for the catalog Django repositories and models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError

from modules.catalog.models import Category, Product, ProductStatus
from modules.catalog.repositories.django_repository import (
    CategoryDjangoRepository,
    ProductDjangoRepository,
)

pytestmark = pytest.mark.unit


@pytest.fixture()
def category_repo():
    return CategoryDjangoRepository()


@pytest.fixture()
def product_repo():
    return ProductDjangoRepository()


class TestCatalogModels:
    def test_category_slug_derived_from_name(self):
        category = Category.objects.create(name="Home Office")
        assert category.slug == "home-office"

    def test_product_slug_derived_from_name(self, category):
        product = Product.objects.create(
            category=category, name="Design Patterns", price=Decimal("42.00")
        )
        assert product.slug == "design-patterns"
        assert product.is_active is True

    def test_inactive_product_is_not_active(self, inactive_product):
        assert inactive_product.status == ProductStatus.INACTIVE
        assert inactive_product.is_active is False

    def test_non_positive_price_rejected_by_database(self, category):
        with pytest.raises(IntegrityError):
            Product.objects.create(
                category=category, name="Free Lunch", price=Decimal("0.00")
            )


class TestCategoryRepository:
    def test_get_by_slug(self, category_repo, category):
        assert category_repo.get_by_slug("books") == category

    def test_get_by_slug_missing(self, category_repo):
        assert category_repo.get_by_slug("missing") is None

    def test_get_by_invalid_id_returns_none(self, category_repo):
        assert category_repo.get_by_id("not-a-uuid") is None

    def test_list_is_ordered_by_name(self, category_repo):
        Category.objects.create(name="Toys")
        Category.objects.create(name="Art")
        assert [c.name for c in category_repo.list()] == ["Art", "Toys"]


class TestProductRepository:
    def test_get_by_id(self, product_repo, product):
        assert product_repo.get_by_id(str(product.id)) == product

    def test_get_by_invalid_id_returns_none(self, product_repo):
        assert product_repo.get_by_id("not-a-uuid") is None

    def test_get_by_slug(self, product_repo, product):
        assert product_repo.get_by_slug("clean-code") == product

    def test_list_with_filters(self, product_repo, product, inactive_product):
        active = product_repo.list({"status": ProductStatus.ACTIVE})
        assert list(active) == [product]

    def test_list_by_category(self, product_repo, product, second_product):
        other = Category.objects.create(name="Garden")
        Product.objects.create(category=other, name="Rake", price=Decimal("12.00"))

        products = product_repo.list_by_category(str(product.category_id))

        assert {p.slug for p in products} == {"clean-code", "refactoring"}

    def test_search_matches_name_case_insensitively(self, product_repo, product):
        assert product_repo.search("CLEAN") == [product]

    def test_search_matches_description(self, product_repo, product, second_product):
        assert product_repo.search("existing code") == [second_product]

    def test_search_without_match(self, product_repo, product):
        assert product_repo.search("gardening") == []
