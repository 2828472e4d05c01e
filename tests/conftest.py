import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.products.models import Category

JPEG_BYTES = b"\xff\xd8\xff\xe0mocked photo data\xff\xd9"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="catalog-admin", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def category():
    return Category.objects.create(name="Test Category", slug="test-category")


@pytest.fixture()
def photo_file(tmp_path):
    """A small JPEG on disk, standing in for a spooled upload."""
    path = tmp_path / "photo.jpg"
    path.write_bytes(JPEG_BYTES)
    return path
