from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.products.dtos import ProductInputDTO
from modules.products.models import Category, Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.slugs import slugify_name

CATALOG = [
    ("Monitor 27 inch", "Electronics", Decimal("1299.90")),
    ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
    ("Gaming Mouse", "Electronics", Decimal("249.90")),
    ("Notebook 14 inch", "Electronics", Decimal("3999.00")),
    ("Headset", "Electronics", Decimal("299.90")),
    ("Office Desk", "Furniture", Decimal("899.00")),
    ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
    ("Bookshelf", "Furniture", Decimal("699.00")),
    ("A4 Paper", "Stationery", Decimal("29.90")),
    ("Blue Pen", "Stationery", Decimal("4.90")),
    ("Sticky Notes", "Stationery", Decimal("12.90")),
    ("Desk Lamp", "Stationery", Decimal("59.90")),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        categories = self._seed_categories()
        products = self._seed_products(categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"categories={len(categories)}, "
                f"products={products}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="manager").exists():
            User.objects.create_user("manager", password="manager123", is_staff=True)
            created += 1
        return created

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        categories: dict[str, Category] = {}
        for name in sorted({category for _, category, _ in CATALOG}):
            categories[name], _ = Category.objects.get_or_create(
                slug=slugify_name(name), defaults={"name": name}
            )
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> int:
        self.stdout.write("Creating products...")
        service = ProductService(repository=ProductDjangoRepository())
        created = 0
        for name, category, price in CATALOG:
            if Product.objects.filter(slug=slugify_name(name)).exists():
                continue
            dto = ProductInputDTO.parse(
                {
                    "name": name,
                    "description": f"{name} ({category})",
                    "price": price,
                    "category": str(categories[category].id),
                    "quantity": random.randint(10, 200),
                    "shipping": random.choice([True, False]),
                }
            )
            service.create_product(dto)
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
