import logging
import time

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, ProtectedError, Q
from django.utils.text import slugify
from rest_framework.exceptions import NotFound

from apps.utils.exceptions import BusinessLogicException

from .models import Category, Product, ProductImage, ProductStatus, ProductVariant

logger = logging.getLogger(__name__)


SORT_ORDERINGS = {
    "newest": ["-created_at"],
    "oldest": ["created_at"],
    "price-low": ["base_price", "-created_at"],
    "price-high": ["-base_price", "-created_at"],
    "rating": ["-rating_average", "-rating_count"],
    "popular": ["-sales_count", "-view_count"],
}


def build_product_slug(name: str) -> str:
    return f"{slugify(name)}-{int(time.time() * 1000)}"


class ProductService:

    @staticmethod
    def list_categories():
        return Category.objects.all().order_by("sort_order", "name")

    @staticmethod
    def _public_queryset():
        return (
            Product.objects
            .filter(status=ProductStatus.ACTIVE)
            .select_related("seller", "category")
            .prefetch_related("images")
        )

    @staticmethod
    def buyer_feed(search: str | None = None):
        """
        Newest active products for the buyer dashboard.
        """
        qs = ProductService._public_queryset()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        return qs.order_by("-created_at")[: settings.BUYER_FEED_LIMIT]

    @staticmethod
    def search_products(
        search=None,
        categories=None,
        min_price=None,
        max_price=None,
        min_rating=None,
        in_stock=False,
        sort="newest",
    ):
        qs = ProductService._public_queryset()

        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        if categories:
            qs = qs.filter(category_id__in=categories)
        if min_price is not None:
            qs = qs.filter(base_price__gte=min_price)
        if max_price is not None:
            qs = qs.filter(base_price__lte=max_price)
        if min_rating:
            qs = qs.filter(rating_average__gte=min_rating)
        if in_stock:
            qs = qs.filter(variants__stock_quantity__gt=0).distinct()

        return qs.order_by(*SORT_ORDERINGS.get(sort or "newest", SORT_ORDERINGS["newest"]))

    @staticmethod
    def get_public_product(product_id, count_view: bool = True) -> Product:
        try:
            product = (
                ProductService._public_queryset()
                .prefetch_related("variants")
                .get(id=product_id)
            )
        except (Product.DoesNotExist, DjangoValidationError):
            raise NotFound("Product not found.")

        if count_view:
            Product.objects.filter(id=product.id).update(view_count=F("view_count") + 1)
            product.refresh_from_db(fields=["view_count"])
        return product

    # --- Seller product manager ---

    @staticmethod
    def seller_products(seller):
        return (
            Product.objects
            .filter(seller=seller)
            .select_related("category")
            .prefetch_related("images", "variants")
            .order_by("-created_at")
        )

    @staticmethod
    def get_seller_product(seller, product_id, lock: bool = False) -> Product:
        qs = Product.objects.select_for_update() if lock else Product.objects.all()
        try:
            return qs.get(id=product_id, seller=seller)
        except (Product.DoesNotExist, DjangoValidationError):
            raise NotFound("Product not found.")

    @staticmethod
    @transaction.atomic
    def create_product(seller, variants=None, image_urls=None, **fields) -> Product:
        if not fields.get("name"):
            raise BusinessLogicException("Product name is required.", code="invalid_product")

        product = Product.objects.create(
            seller=seller,
            slug=build_product_slug(fields["name"]),
            **fields,
        )

        for index, url in enumerate(image_urls or []):
            ProductImage.objects.create(
                product=product, image_url=url, sort_order=index, is_primary=(index == 0)
            )
        for variant in variants or []:
            ProductVariant.objects.create(product=product, **variant)

        logger.info("Product %s created by seller %s", product.id, seller.id, extra={"seller_id": seller.id})
        return product

    @staticmethod
    @transaction.atomic
    def update_product(seller, product_id, image_urls=None, **fields) -> Product:
        # slug stays fixed once the product exists
        fields.pop("slug", None)
        product = ProductService.get_seller_product(seller, product_id, lock=True)

        for attr, value in fields.items():
            setattr(product, attr, value)
        product.save()

        if image_urls is not None:
            product.images.all().delete()
            for index, url in enumerate(image_urls):
                ProductImage.objects.create(
                    product=product, image_url=url, sort_order=index, is_primary=(index == 0)
                )

        logger.info("Product %s updated", product.id, extra={"seller_id": seller.id})
        return product

    @staticmethod
    @transaction.atomic
    def delete_product(seller, product_id) -> None:
        product = ProductService.get_seller_product(seller, product_id, lock=True)
        try:
            product.delete()
        except ProtectedError:
            # ordered products stay for order history; seller can set them inactive
            raise BusinessLogicException(
                "This product has orders and cannot be deleted.", code="product_has_orders"
            )
        logger.info("Product %s deleted", product_id, extra={"seller_id": seller.id})

    @staticmethod
    @transaction.atomic
    def add_variant(seller, product_id, **fields) -> ProductVariant:
        product = ProductService.get_seller_product(seller, product_id)
        return ProductVariant.objects.create(product=product, **fields)
