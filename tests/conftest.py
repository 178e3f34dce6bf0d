from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.catalog.models import Category, Product, ProductStatus

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def user():
    return User.objects.create_user(username="shopper", password="shopper-pass-123")


@pytest.fixture()
def other_user():
    return User.objects.create_user(username="intruder", password="intruder-pass-123")


@pytest.fixture()
def auth_client(user):
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture()
def category():
    return Category.objects.create(
        name="Books", slug="books", description="Paper and ink."
    )


@pytest.fixture()
def product(category):
    return Product.objects.create(
        category=category,
        name="Clean Code",
        slug="clean-code",
        description="A handbook of agile software craftsmanship.",
        price=Decimal("10.00"),
        status=ProductStatus.ACTIVE,
    )


@pytest.fixture()
def second_product(category):
    return Product.objects.create(
        category=category,
        name="Refactoring",
        slug="refactoring",
        description="Improving the design of existing code.",
        price=Decimal("25.50"),
        status=ProductStatus.ACTIVE,
    )


@pytest.fixture()
def inactive_product(category):
    return Product.objects.create(
        category=category,
        name="Out Of Print",
        slug="out-of-print",
        price=Decimal("5.00"),
        status=ProductStatus.INACTIVE,
    )
