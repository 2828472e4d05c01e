"""Integration tests for Product API endpoints.

Covers:
- Fetch by slug, create, update, delete via /api/v1/products/.
- Per-endpoint response shapes for 400 / 404 / 500.
- Photo upload, storage and download.
- Authentication enforcement on writes (401 without credentials).
"""

from __future__ import annotations

import base64
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import DatabaseError

from rest_framework.test import APIRequestFactory, force_authenticate

from modules.products.models import Category, Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.views import ProductViewSet

pytestmark = pytest.mark.integration

PRODUCTS_URL = "/api/v1/products/"

OUT_OF_COLUMN_VALUES = [
    ({"price": "0.001"}, "Price must be a valid number"),
    ({"price": "19.999"}, "Price must be a valid number"),
    ({"price": "123456789012"}, "Price must be a valid number"),
    ({"quantity": "2147483648"}, "Quantity must be a valid number"),
    ({"quantity": "1" + "0" * 25}, "Quantity must be a valid number"),
]


# ---------------------------------------------------------------------------
# Helpers & fixtures
# ---------------------------------------------------------------------------


def _by_id_url(product_id) -> str:
    return f"{PRODUCTS_URL}id/{product_id}/"


def _photo(size: int = 500_000, content_type: str = "image/jpeg") -> SimpleUploadedFile:
    return SimpleUploadedFile("photo.jpg", b"\xff" * size, content_type=content_type)


def _form(category: Category, /, **overrides) -> dict:
    data = {
        "name": "Test Product",
        "description": "Product description",
        "price": 100,
        "category": str(category.id),
        "quantity": 10,
        "shipping": "Shipping Info",
    }
    data.update(overrides)
    return data


@pytest.fixture()
def sample_product(category):
    return Product.objects.create(
        name="Widget Alpha",
        slug="widget-alpha",
        description="A fine widget",
        price=Decimal("19.99"),
        category=category,
        quantity=100,
        shipping=True,
        photo_content_type="image/png",
        photo_data=b"png bytes",
    )


# ===========================================================================
# Authentication
# ===========================================================================


class TestProductAPIAuth:
    def test_create_requires_auth(self, api_client, category):
        response = api_client.post(PRODUCTS_URL, _form(category), format="multipart")
        assert response.status_code == 401

    def test_delete_requires_auth(self, api_client, sample_product):
        response = api_client.delete(_by_id_url(sample_product.id))
        assert response.status_code == 401

    def test_fetch_is_public(self, api_client, sample_product):
        response = api_client.get(f"{PRODUCTS_URL}widget-alpha/")
        assert response.status_code == 200


# ===========================================================================
# FETCH ONE
# ===========================================================================


class TestProductFetchOne:
    def test_returns_product(self, api_client, sample_product, category):
        response = api_client.get(f"{PRODUCTS_URL}widget-alpha/")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Single Product Fetched"
        assert body["product"]["id"] == str(sample_product.id)
        assert body["product"]["name"] == "Widget Alpha"
        assert body["product"]["category"]["name"] == "Test Category"
        assert "photo" not in body["product"]

    def test_unknown_slug_returns_404(self, api_client):
        response = api_client.get(f"{PRODUCTS_URL}ghost/")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_missing_slug_returns_400(self):
        request = APIRequestFactory().get(PRODUCTS_URL)
        view = ProductViewSet.as_view({"get": "retrieve"})

        response = view(request)

        assert response.status_code == 400
        assert response.data == {"success": False, "message": "Product ID is required"}

    def test_store_failure_returns_500(self, api_client):
        with patch.object(
            ProductDjangoRepository,
            "find_by_slug_expanded",
            side_effect=DatabaseError("Database error"),
        ):
            response = api_client.get(f"{PRODUCTS_URL}widget-alpha/")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Error while getting single product",
            "error": "Database error",
        }


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_with_photo(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL, {**_form(category), "photo": _photo()}, format="multipart"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product created successfully"
        assert body["products"]["slug"] == "test-product"
        assert body["products"]["photo"]["contentType"] == "image/jpeg"
        assert len(base64.b64decode(body["products"]["photo"]["data"])) == 500_000
        assert body["products"]["category"] == str(category.id)
        assert body["products"]["shipping"] == "Shipping Info"

        stored = Product.objects.get(slug="test-product")
        assert stored.price == Decimal("100.00")
        assert stored.quantity == 10
        assert stored.photo.content_type == "image/jpeg"

    def test_create_with_json_body(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL, _form(category, shipping=True), format="json"
        )

        assert response.status_code == 201
        assert response.json()["products"]["photo"] is None
        assert Product.objects.get(slug="test-product").shipping is True

    def test_negative_price_returns_400_without_write(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL,
            {**_form(category, price=-1), "photo": _photo()},
            format="multipart",
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Price must be a positive number"}
        assert Product.objects.count() == 0

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"name": ""}, "Name is required"),
            ({"description": ""}, "Description is required"),
            ({"price": ""}, "Price is required"),
            ({"price": "abc"}, "Price must be a valid number"),
            ({"category": ""}, "Category is required"),
            ({"quantity": ""}, "Quantity is required"),
            ({"quantity": "xyz"}, "Quantity must be a valid number"),
            ({"quantity": -1}, "Quantity must be a positive number"),
        ],
    )
    def test_invalid_fields_return_400(self, auth_client, category, overrides, message):
        response = auth_client.post(
            PRODUCTS_URL, _form(category, **overrides), format="multipart"
        )

        assert response.status_code == 400
        assert response.json() == {"error": message}
        assert Product.objects.count() == 0

    @pytest.mark.parametrize("overrides, message", OUT_OF_COLUMN_VALUES)
    def test_values_outside_column_return_400(
        self, auth_client, category, overrides, message
    ):
        response = auth_client.post(
            PRODUCTS_URL, _form(category, **overrides), format="multipart"
        )

        assert response.status_code == 400
        assert response.json() == {"error": message}
        assert Product.objects.count() == 0

    def test_values_at_column_limits_are_stored(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL,
            _form(category, price="99999999.99", quantity="2147483647"),
            format="multipart",
        )

        assert response.status_code == 201
        stored = Product.objects.get(slug="test-product")
        assert stored.price == Decimal("99999999.99")
        assert stored.quantity == 2147483647

    def test_name_without_letters_is_fetchable(self, auth_client, api_client, category):
        response = auth_client.post(
            PRODUCTS_URL, _form(category, name="!!!"), format="multipart"
        )

        assert response.status_code == 201
        slug = response.json()["products"]["slug"]
        assert slug.startswith("product-")
        assert api_client.get(f"{PRODUCTS_URL}{slug}/").status_code == 200

    def test_oversized_photo_returns_400(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL,
            {**_form(category), "photo": _photo(size=1_000_001)},
            format="multipart",
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Photo should be less than 1MB"}

    def test_store_failure_returns_500(self, auth_client, category):
        with patch.object(
            ProductDjangoRepository,
            "save",
            side_effect=DatabaseError("Database error: Unable to save product."),
        ):
            response = auth_client.post(
                PRODUCTS_URL, _form(category), format="multipart"
            )

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Database error: Unable to save product.",
            "message": "Error in creating product",
        }

    def test_malformed_category_returns_500(self, auth_client, category):
        response = auth_client.post(
            PRODUCTS_URL, _form(category, category="Test Category"), format="multipart"
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Error in creating product"


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_update_fields(self, auth_client, sample_product, category):
        response = auth_client.put(
            _by_id_url(sample_product.id),
            _form(category, name="Updated Product", price=150, quantity=20),
            format="multipart",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product updated successfully"
        assert body["products"]["name"] == "Updated Product"
        assert body["products"]["slug"] == "updated-product"

        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("150.00")
        assert sample_product.quantity == 20
        assert sample_product.photo.data == b"png bytes"

    def test_update_replaces_photo(self, auth_client, sample_product, category):
        response = auth_client.put(
            _by_id_url(sample_product.id),
            {**_form(category), "photo": _photo(size=10)},
            format="multipart",
        )

        assert response.status_code == 201
        assert response.json()["products"]["photo"]["contentType"] == "image/jpeg"
        sample_product.refresh_from_db()
        assert sample_product.photo.data == b"\xff" * 10

    @pytest.mark.parametrize("overrides, message", OUT_OF_COLUMN_VALUES)
    def test_values_outside_column_return_400(
        self, auth_client, sample_product, category, overrides, message
    ):
        response = auth_client.put(
            _by_id_url(sample_product.id),
            _form(category, **overrides),
            format="multipart",
        )

        assert response.status_code == 400
        assert response.json() == {"error": message}
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")
        assert sample_product.quantity == 100

    def test_unknown_id_returns_404(self, auth_client, category):
        response = auth_client.put(
            _by_id_url("validProductId"), _form(category), format="multipart"
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_invalid_fields_return_400(self, auth_client, sample_product, category):
        response = auth_client.put(
            _by_id_url(sample_product.id),
            _form(category, price=-5),
            format="multipart",
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Price must be a positive number"}
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")

    def test_photo_save_failure_returns_500(self, auth_client, sample_product, category):
        with patch.object(
            ProductDjangoRepository,
            "save",
            side_effect=DatabaseError("Database error: Unable to save product."),
        ):
            response = auth_client.put(
                _by_id_url(sample_product.id),
                {**_form(category), "photo": _photo(size=10)},
                format="multipart",
            )

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Error in updating product"


# ===========================================================================
# DELETE
# ===========================================================================


class TestProductDelete:
    def test_delete(self, auth_client, sample_product):
        response = auth_client.delete(_by_id_url(sample_product.id))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Product Deleted successfully",
        }
        assert not Product.objects.filter(pk=sample_product.pk).exists()

    def test_unknown_id_returns_404(self, auth_client):
        response = auth_client.delete(_by_id_url("validProductId"))

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_missing_id_returns_400(self, django_user_model):
        user = django_user_model.objects.create_user(username="catalog-staff", password="x")
        request = APIRequestFactory().delete(PRODUCTS_URL)
        force_authenticate(request, user=user)
        view = ProductViewSet.as_view({"delete": "destroy"})

        response = view(request)

        assert response.status_code == 400
        assert response.data == {"success": False, "message": "Product ID is required"}

    def test_store_failure_returns_500(self, auth_client, sample_product):
        with patch.object(
            ProductDjangoRepository,
            "delete_by_id",
            side_effect=DatabaseError("Database error"),
        ) as delete_by_id:
            response = auth_client.delete(_by_id_url(sample_product.id))

        delete_by_id.assert_called_once_with(str(sample_product.id))
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Error while deleting product",
            "error": "Database error",
        }


# ===========================================================================
# LIST & PHOTO
# ===========================================================================


class TestProductList:
    def test_list_returns_products(self, api_client, sample_product):
        response = api_client.get(PRODUCTS_URL)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["products"][0]["slug"] == "widget-alpha"

    def test_list_filters_by_category(self, api_client, sample_product):
        other = Category.objects.create(name="Other", slug="other")

        response = api_client.get(PRODUCTS_URL, {"category": str(other.id)})

        assert response.json()["count"] == 0


class TestProductPhoto:
    def test_returns_photo_bytes(self, api_client, sample_product):
        response = api_client.get(f"{_by_id_url(sample_product.id)}photo/")

        assert response.status_code == 200
        assert response["Content-Type"] == "image/png"
        assert response.content == b"png bytes"

    def test_missing_photo_returns_404(self, api_client, category):
        product = Product.objects.create(
            name="Bare",
            slug="bare",
            description="No photo",
            price=Decimal("1.00"),
            category=category,
            quantity=1,
        )

        response = api_client.get(f"{_by_id_url(product.id)}photo/")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Photo not found"}
