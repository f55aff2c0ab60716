"""
Small builders shared by the app test suites.
"""
from decimal import Decimal

from apps.accounts.models import Role, User
from apps.catalog.models import Category, Product, ProductStatus, ProductVariant
from apps.customers.models import Address
from apps.sellers.models import Seller, VerificationStatus

PASSWORD = "Str0ng-Passw0rd!"


def make_user(email="buyer@example.com", role=Role.BUYER, **extra):
    extra.setdefault("full_name", email.split("@")[0].title())
    return User.objects.create_user(email=email, password=PASSWORD, role=role, **extra)


def make_seller(email="seller@example.com", business_name="Acme Goods", **extra):
    user = make_user(email=email, role=Role.SELLER)
    extra.setdefault("verification_status", VerificationStatus.VERIFIED)
    return Seller.objects.create(user=user, business_name=business_name, business_type="retail", **extra)


def make_product(seller, name="Widget", price="10.00", status=ProductStatus.ACTIVE, **extra):
    return Product.objects.create(
        seller=seller,
        name=name,
        slug=f"{name.lower().replace(' ', '-')}-{Product.objects.count()}",
        base_price=Decimal(price),
        status=status,
        **extra,
    )


def make_variant(product, sku, price="10.00", stock=5, name=None):
    return ProductVariant.objects.create(
        product=product,
        sku=sku,
        name=name or sku,
        price=Decimal(price),
        stock_quantity=stock,
    )


def make_category(name="Gadgets"):
    return Category.objects.create(name=name)


def make_address(user, **extra):
    fields = {
        "full_name": user.full_name,
        "phone": "+1 555 0100",
        "address_line1": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62701",
    }
    fields.update(extra)
    return Address.objects.create(user=user, **fields)
