"""Product service layer (Use Cases).

Orchestrates the catalog use-cases, delegating persistence to the
injected ``IProductRepository`` and photo reading to an injected encoder.

Rules enforced here:
- Input is validated by ``ProductInputDTO.parse`` before reaching the service.
- Slug is derived from the product name on create and on update.
- Store and file-read faults become ``ProductPersistenceError`` with the
  operation's user-facing message; they are never retried here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

import structlog
from django.db import DatabaseError

from modules.products.exceptions import (
    InvalidProductInput,
    ProductNotFound,
    ProductPersistenceError,
)
from modules.products.models import Product
from modules.products.photos import PhotoPayload, encode_photo
from modules.products.slugs import slugify_name

if TYPE_CHECKING:
    from modules.products.dtos import PhotoUpload, ProductInputDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

PERSISTENCE_FAULTS = (DatabaseError, OSError)

PRODUCT_ID_REQUIRED = "Product ID is required"
PRODUCT_NOT_FOUND = "Product not found"
PHOTO_NOT_FOUND = "Photo not found"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``photo_encoder`` defaults to reading the upload from disk.
    """

    def __init__(
        self,
        repository: IProductRepository,
        photo_encoder: Callable[[PhotoUpload], PhotoPayload] = encode_photo,
    ) -> None:
        self._repo = repository
        self._encode_photo = photo_encoder

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: ProductInputDTO) -> Product:
        """Create a product, embedding the uploaded photo when present.

        Raises:
            ProductPersistenceError: if the photo cannot be read or the
                store rejects the write.
        """
        product = Product(**self._product_fields(dto))
        log = logger.bind(slug=product.slug)

        try:
            if dto.photo is not None:
                product.attach_photo(self._encode_photo(dto.photo))
            product = self._repo.save(product)
        except PERSISTENCE_FAULTS as exc:
            log.error("product.create_failed", error=str(exc))
            raise ProductPersistenceError("Error in creating product") from exc

        log.info("product.created", product_id=str(product.id))
        return product

    def update_product(self, id: str, dto: ProductInputDTO) -> Product:
        """Replace a product's fields, then its photo when one was uploaded.

        Raises:
            ProductNotFound: if no product has this id.
            ProductPersistenceError: if either write or the photo read fails.
        """
        log = logger.bind(product_id=str(id))

        try:
            product = self._repo.replace_by_id(id, self._product_fields(dto))
        except PERSISTENCE_FAULTS as exc:
            log.error("product.update_failed", error=str(exc))
            raise ProductPersistenceError("Error in updating product") from exc

        if product is None:
            log.warning("product.update_not_found")
            raise ProductNotFound(PRODUCT_NOT_FOUND)

        if dto.photo is not None:
            try:
                product.attach_photo(self._encode_photo(dto.photo))
                product = self._repo.save(product)
            except PERSISTENCE_FAULTS as exc:
                log.error("product.photo_update_failed", error=str(exc))
                raise ProductPersistenceError("Error in updating product") from exc

        log.info("product.updated", photo_replaced=dto.photo is not None)
        return product

    def delete_product(self, id: Optional[str]) -> None:
        """Hard-delete a product by id.

        Raises:
            InvalidProductInput: if ``id`` is empty.
            ProductNotFound: if no product has this id.
            ProductPersistenceError: if the store fails.
        """
        if _is_blank(id):
            raise InvalidProductInput(PRODUCT_ID_REQUIRED)

        try:
            deleted = self._repo.delete_by_id(id)
        except PERSISTENCE_FAULTS as exc:
            logger.error("product.delete_failed", product_id=str(id), error=str(exc))
            raise ProductPersistenceError("Error while deleting product") from exc

        if deleted is None:
            raise ProductNotFound(PRODUCT_NOT_FOUND)
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, slug: Optional[str]) -> Product:
        """Retrieve a single product by slug, with its category expanded.

        Raises:
            InvalidProductInput: if ``slug`` is empty.
            ProductNotFound: if no product has this slug.
            ProductPersistenceError: if the store fails.
        """
        if _is_blank(slug):
            raise InvalidProductInput(PRODUCT_ID_REQUIRED)

        try:
            product = self._repo.find_by_slug_expanded(slug)
        except PERSISTENCE_FAULTS as exc:
            logger.error("product.fetch_failed", slug=slug, error=str(exc))
            raise ProductPersistenceError("Error while getting single product") from exc

        if product is None:
            raise ProductNotFound(PRODUCT_NOT_FOUND)
        return product

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return the newest products, optionally filtered."""
        try:
            return self._repo.list(filters)
        except PERSISTENCE_FAULTS as exc:
            logger.error("product.list_failed", error=str(exc))
            raise ProductPersistenceError("Error in getting products") from exc

    def get_photo(self, id: Optional[str]) -> PhotoPayload:
        """Return the stored photo of a product.

        Raises:
            ProductNotFound: if the product does not exist or has no photo.
            ProductPersistenceError: if the store fails.
        """
        if _is_blank(id):
            raise ProductNotFound(PHOTO_NOT_FOUND)

        try:
            product = self._repo.get_by_id(id)
        except PERSISTENCE_FAULTS as exc:
            logger.error("product.photo_fetch_failed", product_id=str(id), error=str(exc))
            raise ProductPersistenceError("Error while getting photo") from exc

        photo = product.photo if product is not None else None
        if photo is None:
            raise ProductNotFound(PHOTO_NOT_FOUND)
        return photo

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _product_fields(dto: ProductInputDTO) -> Dict[str, Any]:
        return {
            "name": dto.name,
            "slug": slugify_name(dto.name),
            "description": dto.description,
            "price": dto.price,
            "category_id": dto.category,
            "quantity": dto.quantity,
            "shipping": dto.shipping,
        }
