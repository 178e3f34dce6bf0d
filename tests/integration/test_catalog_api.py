"""Integration tests for the public catalog endpoints."""

from decimal import Decimal

import pytest

from modules.catalog.models import Category, Product, ProductStatus

pytestmark = pytest.mark.integration

CATEGORIES_URL = "/api/v1/categories/"
PRODUCTS_URL = "/api/v1/products/"
SEARCH_URL = "/api/v1/products/search/"


@pytest.fixture()
def garden():
    category = Category.objects.create(name="Garden", slug="garden")
    Product.objects.create(
        category=category,
        name="Steel Rake",
        slug="steel-rake",
        description="Sturdy rake for autumn leaves.",
        price=Decimal("35.00"),
    )
    return category


class TestCategories:
    def test_list_categories_is_public(self, api_client, category, garden):
        response = api_client.get(CATEGORIES_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert [c["slug"] for c in data["results"]] == ["books", "garden"]

    def test_category_detail_includes_products(
        self, api_client, category, product, second_product, garden
    ):
        response = api_client.get(f"{CATEGORIES_URL}books/")

        assert response.status_code == 200
        data = response.json()
        assert data["category"]["slug"] == "books"
        assert data["category"]["id"] == str(category.id)
        assert sorted(p["slug"] for p in data["products"]) == [
            "clean-code",
            "refactoring",
        ]

    def test_unknown_category_returns_404(self, api_client):
        response = api_client.get(f"{CATEGORIES_URL}missing/")

        assert response.status_code == 404
        assert response.json() == {"detail": "Category not found."}


class TestProducts:
    def test_list_products(self, api_client, product, second_product):
        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        first = data["results"][0]
        assert first["slug"] == "clean-code"
        assert first["price"] == "10.00"
        assert first["category_slug"] == "books"

    def test_filter_by_category_slug(self, api_client, product, garden):
        response = api_client.get(PRODUCTS_URL, {"category": "garden"})

        assert [p["slug"] for p in response.json()["results"]] == ["steel-rake"]

    def test_filter_by_price_range(self, api_client, product, second_product, garden):
        response = api_client.get(PRODUCTS_URL, {"min_price": "20", "max_price": "30"})

        assert [p["slug"] for p in response.json()["results"]] == ["refactoring"]

    def test_filter_by_status(self, api_client, product, inactive_product):
        response = api_client.get(PRODUCTS_URL, {"status": "inactive"})

        assert [p["slug"] for p in response.json()["results"]] == ["out-of-print"]

    def test_ordering_by_price_descending(self, api_client, product, second_product):
        response = api_client.get(PRODUCTS_URL, {"ordering": "-price"})

        assert [p["slug"] for p in response.json()["results"]] == [
            "refactoring",
            "clean-code",
        ]

    def test_page_size_parameter(self, api_client, product, second_product):
        response = api_client.get(PRODUCTS_URL, {"page_size": 1})

        data = response.json()
        assert data["count"] == 2
        assert len(data["results"]) == 1
        assert data["next"] is not None

    def test_product_detail_by_slug(self, api_client, product):
        response = api_client.get(f"{PRODUCTS_URL}clean-code/")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(product.id)
        assert data["name"] == "Clean Code"
        assert data["status"] == ProductStatus.ACTIVE

    def test_unknown_product_returns_404(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}missing/")

        assert response.status_code == 404
        assert response.json() == {"detail": "Product not found."}


class TestSearch:
    def test_search_by_name(self, api_client, product, second_product):
        response = api_client.get(SEARCH_URL, {"q": "clean"})

        assert response.status_code == 200
        assert [p["slug"] for p in response.json()] == ["clean-code"]

    def test_search_by_description(self, api_client, product, garden):
        response = api_client.get(SEARCH_URL, {"q": "autumn"})

        assert [p["slug"] for p in response.json()] == ["steel-rake"]

    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_blank_query_returns_empty_list(self, api_client, product, params):
        response = api_client.get(SEARCH_URL, params)

        assert response.status_code == 200
        assert response.json() == []
