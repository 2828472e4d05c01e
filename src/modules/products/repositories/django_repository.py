"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
for missing or malformed ids instead of raising HTTP-level exceptions.
Values the database cannot accept (e.g. a malformed category reference)
are reported as ``DataError`` so callers only need to handle
``DatabaseError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DataError, transaction
from django.utils import timezone

from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

PHOTO_FIELD = "photo_data"


def _as_uuid(value: Any) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self, list_limit: Optional[int] = None) -> None:
        self._list_limit = list_limit or settings.PRODUCT_LIST_LIMIT

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product (photo included) by primary key."""
        pk = _as_uuid(id)
        if pk is None:
            return None
        return Product.objects.select_related("category").filter(pk=pk).first()

    def find_by_slug_expanded(self, slug: str) -> Optional[Product]:
        return (
            Product.objects.select_related("category")
            .defer(PHOTO_FIELD)
            .filter(slug=slug)
            .first()
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List the newest products, photo bytes excluded.

        ``filters`` are raw query parameters understood by ``ProductFilter``
        (``category``, ``min_price``, ``max_price``); invalid values are
        ignored.
        """
        queryset = (
            Product.objects.select_related("category")
            .defer(PHOTO_FIELD)
            .order_by("-created_at", "-id")
        )
        if filters:
            queryset = ProductFilter(filters, queryset=queryset).qs
        return list(queryset[: self._list_limit])

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        try:
            entity.save()
        except (ValueError, ArithmeticError, ValidationError) as exc:
            raise DataError(f"Invalid product data: {exc}") from exc
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            slug=entity.slug,
        )
        return entity

    @transaction.atomic
    def replace_by_id(self, id: str, fields: Dict[str, Any]) -> Optional[Product]:
        pk = _as_uuid(id)
        if pk is None:
            return None
        try:
            updated = Product.objects.filter(pk=pk).update(
                **fields, updated_at=timezone.now()
            )
        except (ValueError, ArithmeticError, ValidationError) as exc:
            raise DataError(f"Invalid product data: {exc}") from exc
        if not updated:
            return None
        logger.info("product.replaced", product_id=str(pk), fields=sorted(fields))
        return Product.objects.select_related("category").get(pk=pk)

    @transaction.atomic
    def delete_by_id(self, id: str) -> Optional[Product]:
        """Hard-delete a product by ID.

        Returns the deleted product, or ``None`` if no product has this ID.
        """
        pk = _as_uuid(id)
        if pk is None:
            return None
        product = Product.objects.defer(PHOTO_FIELD).filter(pk=pk).first()
        if product is None:
            return None
        product.delete()
        logger.info("product.deleted", product_id=str(pk))
        return product
