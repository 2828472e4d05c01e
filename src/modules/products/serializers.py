"""Product DRF serializers for API output.

Request input is parsed into Pydantic DTOs (``dtos.py``); these
serializers only render service results.
"""

from __future__ import annotations

import base64

from rest_framework import serializers

from modules.products.models import Category, Product


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug"]


class ProductSerializer(serializers.ModelSerializer):
    """Read view of a product: category expanded, photo bytes left out."""

    category = CategorySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "category",
            "quantity",
            "shipping",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductRecordSerializer(serializers.ModelSerializer):
    """Stored record returned after a write.

    ``category`` is the raw reference and ``photo`` carries the stored
    bytes base64-encoded under ``data`` next to ``contentType``.
    """

    category = serializers.CharField(source="category_id", read_only=True)
    photo = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "category",
            "quantity",
            "shipping",
            "photo",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_photo(self, product: Product) -> dict | None:
        photo = product.photo
        if photo is None:
            return None
        return {
            "contentType": photo.content_type,
            "data": base64.b64encode(photo.data).decode("ascii"),
        }
