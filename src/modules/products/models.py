"""Catalog models: categories and the products that reference them.

Business rules implemented:
- Price must be greater than zero (application validator + DB constraint).
- Quantity must be greater than zero (application validator + DB constraint).
- Slug is unique and derived from the product name by the service layer.
- Photo bytes are stored inline with their content type.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.products.photos import PhotoPayload


class Category(BaseModel):
    """Product category, expanded inline when a product is fetched."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(BaseModel):
    """Product aggregate root.

    ``photo_data`` is excluded from list/detail queries and only loaded
    when a product is written or its photo is served.
    """

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    shipping = models.JSONField(null=True, blank=True, default=None)
    photo_content_type = models.CharField(max_length=100, blank=True, default="")
    photo_data = models.BinaryField(null=True, blank=True, default=None)

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="products_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Photo
    # ------------------------------------------------------------------

    def attach_photo(self, photo: PhotoPayload) -> None:
        self.photo_content_type = photo.content_type
        self.photo_data = photo.data

    @property
    def photo(self) -> Optional[PhotoPayload]:
        """Stored photo, or ``None`` when the product has none."""
        if not self.photo_data:
            return None
        return PhotoPayload(
            content_type=self.photo_content_type,
            data=bytes(self.photo_data),
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.slug} - {self.name}"
