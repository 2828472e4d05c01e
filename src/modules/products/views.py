"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into each endpoint's
response shape; the view never swallows generic exceptions.

Response bodies differ per endpoint (e.g. create/update validation
errors carry only ``error``); clients depend on these shapes.
"""

from __future__ import annotations

from typing import Optional

from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import PhotoUpload, ProductInputDTO
from modules.products.exceptions import (
    InvalidProductInput,
    ProductNotFound,
    ProductPersistenceError,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductRecordSerializer, ProductSerializer
from modules.products.services import ProductService

DEFAULT_PHOTO_CONTENT_TYPE = "application/octet-stream"

PUBLIC_ACTIONS = {"list", "retrieve", "photo"}


def _photo_upload(request: Request) -> Optional[PhotoUpload]:
    """Describe the uploaded ``photo`` file, if the request carries one."""
    uploaded = request.FILES.get("photo")
    if uploaded is None:
        return None
    return PhotoUpload(
        path=uploaded.temporary_file_path(),
        size=uploaded.size,
        content_type=uploaded.content_type or DEFAULT_PHOTO_CONTENT_TYPE,
    )


def _failure(message: str, code: int, **extra) -> Response:
    return Response({"success": False, "message": message, **extra}, status=code)


class ProductViewSet(GenericViewSet):
    """ViewSet for the product catalog.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Reads are public; writes require an authenticated user.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAuthenticated()]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        try:
            products = self._service.list_products(request.query_params.dict())
        except ProductPersistenceError as exc:
            return _failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, error=exc.error)
        return Response(
            {
                "success": True,
                "count": len(products),
                "message": "All products",
                "products": ProductSerializer(products, many=True).data,
            }
        )

    def retrieve(self, request: Request, slug: str | None = None) -> Response:
        """GET /api/v1/products/{slug}/"""
        try:
            product = self._service.get_product(slug)
        except InvalidProductInput as exc:
            return _failure(str(exc), status.HTTP_400_BAD_REQUEST)
        except ProductNotFound as exc:
            return _failure(str(exc), status.HTTP_404_NOT_FOUND)
        except ProductPersistenceError as exc:
            return _failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, error=exc.error)
        return Response(
            {
                "success": True,
                "message": "Single Product Fetched",
                "product": ProductSerializer(product).data,
            }
        )

    def photo(self, request: Request, pk: str | None = None) -> HttpResponse:
        """GET /api/v1/products/id/{pk}/photo/"""
        try:
            photo = self._service.get_photo(pk)
        except ProductNotFound as exc:
            return _failure(str(exc), status.HTTP_404_NOT_FOUND)
        except ProductPersistenceError as exc:
            return _failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, error=exc.error)
        return HttpResponse(photo.data, content_type=photo.content_type)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = ProductInputDTO.parse(request.data, _photo_upload(request))
        except InvalidProductInput as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.create_product(dto)
        except ProductPersistenceError as exc:
            return Response(
                {"success": False, "error": exc.error, "message": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "success": True,
                "message": "Product created successfully",
                "products": ProductRecordSerializer(product).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/id/{pk}/"""
        try:
            dto = ProductInputDTO.parse(request.data, _photo_upload(request))
        except InvalidProductInput as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound as exc:
            return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except ProductPersistenceError as exc:
            return _failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, error=exc.error)

        return Response(
            {
                "success": True,
                "message": "Product updated successfully",
                "products": ProductRecordSerializer(product).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/id/{pk}/"""
        try:
            self._service.delete_product(pk)
        except InvalidProductInput as exc:
            return _failure(str(exc), status.HTTP_400_BAD_REQUEST)
        except ProductNotFound as exc:
            return _failure(str(exc), status.HTTP_404_NOT_FOUND)
        except ProductPersistenceError as exc:
            return _failure(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, error=exc.error)
        return Response({"success": True, "message": "Product Deleted successfully"})
