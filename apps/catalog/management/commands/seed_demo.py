import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import Role
from apps.catalog.models import Category, ProductImage, ProductStatus, ProductVariant
from apps.catalog.services import build_product_slug
from apps.sellers.models import Seller, VerificationStatus

CATALOG = {
    "Electronics": [
        ("Wireless Earbuds", "49.99", ["Black", "White"]),
        ("Bluetooth Speaker", "79.00", ["Blue", "Red"]),
    ],
    "Home & Kitchen": [
        ("Ceramic Mug", "12.50", ["Small", "Large"]),
        ("Cast Iron Skillet", "34.99", []),
    ],
    "Books": [
        ("Field Guide to Birds", "18.00", []),
    ],
}


class Command(BaseCommand):
    help = "Seed demo categories, a verified seller and active products (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--seller-email", default="demo-seller@example.com")
        parser.add_argument("--password", default="demo-password-123")

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        user, created = User.objects.get_or_create(
            email=options["seller_email"].lower(),
            defaults={"full_name": "Demo Seller", "role": Role.SELLER},
        )
        if created:
            user.set_password(options["password"])
            user.save(update_fields=["password"])

        seller, _ = Seller.objects.get_or_create(
            user=user,
            defaults={
                "business_name": "Demo Outfitters",
                "business_type": "retail",
                "verification_status": VerificationStatus.VERIFIED,
            },
        )

        products_created = 0
        for sort_order, (category_name, products) in enumerate(CATALOG.items()):
            category, _ = Category.objects.get_or_create(
                name=category_name, parent=None, defaults={"sort_order": sort_order}
            )
            for name, price, variants in products:
                if seller.products.filter(name=name).exists():
                    continue

                product = seller.products.create(
                    category=category,
                    name=name,
                    slug=build_product_slug(name),
                    description=f"Demo listing for {name.lower()}.",
                    base_price=Decimal(price),
                    status=ProductStatus.ACTIVE,
                    featured=random.random() < 0.3,
                )
                ProductImage.objects.create(
                    product=product,
                    image_url=f"https://picsum.photos/seed/{product.slug}/600/600",
                    is_primary=True,
                )
                for variant_name in variants:
                    ProductVariant.objects.create(
                        product=product,
                        sku=f"{product.slug[:40]}-{variant_name}".upper(),
                        name=variant_name,
                        price=Decimal(price),
                        stock_quantity=random.randint(5, 50),
                    )
                products_created += 1

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {products_created} products for {seller.business_name} ({user.email})"
        ))
