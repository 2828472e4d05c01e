"""Product URL configuration.

Products are read by slug and written by id, so the routes are wired
explicitly instead of through a router.
"""

from __future__ import annotations

from django.urls import path

from modules.products.views import ProductViewSet

product_collection = ProductViewSet.as_view({"get": "list", "post": "create"})
product_by_slug = ProductViewSet.as_view({"get": "retrieve"})
product_by_id = ProductViewSet.as_view({"put": "update", "delete": "destroy"})
product_photo = ProductViewSet.as_view({"get": "photo"})

urlpatterns = [
    path("products/", product_collection, name="product-list"),
    path("products/id/<str:pk>/", product_by_id, name="product-detail-by-id"),
    path("products/id/<str:pk>/photo/", product_photo, name="product-photo"),
    path("products/<str:slug>/", product_by_slug, name="product-detail"),
]
