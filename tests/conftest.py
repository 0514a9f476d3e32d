"""
Test configuration for the rewards server.
"""
import os

import django
import pytest


def pytest_configure():
    """Configure Django settings for testing."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'rewards_server.settings')
    os.environ.setdefault('ENVIRONMENT', 'test')
    django.setup()


@pytest.fixture
def user_factory():
    """Factory for creating test users."""
    from tests.factories import UserFactory
    return UserFactory


@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def rich_user():
    """A user holding 1000 points."""
    from tests.factories import UserFactory
    return UserFactory(points=1000)


@pytest.fixture
def admin_user():
    from tests.factories import AdminUserFactory
    return AdminUserFactory()


@pytest.fixture
def sample_product():
    """An active product costing 100 points with 5 units in stock."""
    from tests.factories import ProductFactory
    return ProductFactory(points_required=100, stock=5)


@pytest.fixture
def unlimited_product():
    from tests.factories import ProductFactory
    return ProductFactory(points_required=50, stock=-1)
