from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.catalog.models import Category, Product, ProductStatus


class Command(BaseCommand):
    help = "Seed database with demo users, categories and products."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        categories = self._seed_categories()
        products = self._seed_products(categories)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"categories={len(categories)}, "
                f"products={len(products)}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="shopper").exists():
            User.objects.create_user("shopper", password="shopper123")
            created += 1
        return created

    def _seed_categories(self) -> dict[str, Category]:
        self.stdout.write("Creating categories...")
        seed_categories = [
            ("electronics", "Electronics", "Screens, keyboards and other gadgets."),
            ("home-office", "Home Office", "Desks, chairs and storage."),
            ("stationery", "Stationery", "Paper, pens and small supplies."),
        ]
        categories: dict[str, Category] = {}
        for slug, name, description in seed_categories:
            category, _ = Category.objects.get_or_create(
                slug=slug,
                defaults={"name": name, "description": description},
            )
            categories[slug] = category
        self.stdout.write(self.style.SUCCESS("Creating categories... Done!"))
        return categories

    def _seed_products(self, categories: dict[str, Category]) -> list[Product]:
        self.stdout.write("Creating products...")
        catalog = [
            ("monitor-27", "Monitor 27\"", "electronics", Decimal("1299.90")),
            ("mechanical-keyboard", "Mechanical Keyboard", "electronics", Decimal("399.90")),
            ("gaming-mouse", "Gaming Mouse", "electronics", Decimal("249.90")),
            ("headset", "Headset", "electronics", Decimal("299.90")),
            ("office-desk", "Office Desk", "home-office", Decimal("899.00")),
            ("ergonomic-chair", "Ergonomic Chair", "home-office", Decimal("1499.00")),
            ("bookshelf", "Bookshelf", "home-office", Decimal("699.00")),
            ("a4-paper", "A4 Paper", "stationery", Decimal("29.90")),
            ("blue-pen", "Blue Pen", "stationery", Decimal("4.90")),
            ("notebook", "Notebook", "stationery", Decimal("19.90")),
            ("sticky-notes", "Sticky Notes", "stationery", Decimal("12.90")),
            ("desk-calculator", "Desk Calculator", "stationery", Decimal("89.90")),
        ]
        products: list[Product] = []
        for slug, name, category_slug, price in catalog:
            product, _ = Product.objects.get_or_create(
                slug=slug,
                defaults={
                    "name": name,
                    "category": categories[category_slug],
                    "description": f"{name} from our {category_slug} range.",
                    "price": price,
                    "status": ProductStatus.ACTIVE,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products
