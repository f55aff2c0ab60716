# apps/catalog/tests.py
import re
from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.orders.services import CartService, CheckoutService
from apps.utils.testing import make_address, make_category, make_product, make_seller, make_user, make_variant

from .models import Category, Product, ProductStatus
from .services import ProductService


class CategoryModelTests(TestCase):
    def test_category_slug_auto_generated_and_unique(self):
        c1 = Category.objects.create(name="Audio")
        c2 = Category.objects.create(name="Audio")

        self.assertNotEqual(c1.slug, c2.slug)
        self.assertTrue(c1.slug.startswith("audio"))
        self.assertTrue(c2.slug.startswith("audio"))


class ProductSearchTests(TestCase):
    def setUp(self):
        self.seller = make_seller()
        self.audio = make_category("Audio")
        self.books = make_category("Books")

        self.cheap = make_product(self.seller, name="Cheap Earbuds", price="15.00", category=self.audio)
        self.pricey = make_product(self.seller, name="Studio Headphones", price="250.00", category=self.audio)
        self.novel = make_product(self.seller, name="Novel", price="20.00", category=self.books)
        make_product(self.seller, name="Draft Thing", status=ProductStatus.DRAFT)

        Product.objects.filter(id=self.pricey.id).update(rating_average=Decimal("4.50"), sales_count=3)
        Product.objects.filter(id=self.novel.id).update(rating_average=Decimal("3.00"), sales_count=10)
        make_variant(self.cheap, "EAR-1", stock=0)
        make_variant(self.pricey, "HP-1", stock=2)

    def names(self, qs):
        return [p.name for p in qs]

    def test_only_active_products(self):
        self.assertNotIn("Draft Thing", self.names(ProductService.search_products()))

    def test_search_and_category(self):
        self.assertEqual(self.names(ProductService.search_products(search="studio")), ["Studio Headphones"])
        result = ProductService.search_products(categories=[self.books.id])
        self.assertEqual(self.names(result), ["Novel"])

    def test_price_range_and_rating(self):
        result = ProductService.search_products(min_price=Decimal("16"), max_price=Decimal("100"))
        self.assertEqual(self.names(result), ["Novel"])
        result = ProductService.search_products(min_rating=Decimal("4"))
        self.assertEqual(self.names(result), ["Studio Headphones"])

    def test_in_stock(self):
        self.assertEqual(self.names(ProductService.search_products(in_stock=True)), ["Studio Headphones"])

    def test_sorting(self):
        self.assertEqual(
            self.names(ProductService.search_products(sort="price-low")),
            ["Cheap Earbuds", "Novel", "Studio Headphones"],
        )
        self.assertEqual(self.names(ProductService.search_products(sort="popular"))[0], "Novel")
        self.assertEqual(self.names(ProductService.search_products(sort="rating"))[0], "Studio Headphones")

    def test_buyer_feed_limit(self):
        for i in range(15):
            make_product(self.seller, name=f"Bulk {i}")
        self.assertEqual(len(ProductService.buyer_feed()), 12)


class PublicProductAPITests(APITestCase):
    def setUp(self):
        self.seller = make_seller()
        self.product = make_product(self.seller, name="Desk Lamp", price="30.00")

    def test_list_with_query_params(self):
        resp = self.client.get(reverse("product-list"), {"sort": "price-high", "in_stock": "false"})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 1)

    def test_bad_sort_rejected(self):
        resp = self.client.get(reverse("product-list"), {"sort": "random"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_detail_counts_views(self):
        url = reverse("product-detail", args=[self.product.id])
        self.client.get(url)
        resp = self.client.get(url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["view_count"], 2)

    def test_draft_product_not_found(self):
        draft = make_product(self.seller, name="Secret", status=ProductStatus.DRAFT)
        resp = self.client.get(reverse("product-detail", args=[draft.id]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)


class SellerProductManagerTests(APITestCase):
    def setUp(self):
        self.seller = make_seller()
        self.client.force_authenticate(self.seller.user)
        self.list_url = reverse("seller-product-list")

    def test_create_with_variants_and_slug(self):
        resp = self.client.post(self.list_url, {
            "name": "Blue Mug",
            "description": "Ceramic",
            "base_price": "12.50",
            "status": "active",
            "image_urls": ["https://cdn.example.com/mug.jpg"],
            "variants": [{"sku": "MUG-BLUE-S", "name": "Small", "price": "12.50", "stock_quantity": 4}],
        }, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, resp.data)
        self.assertTrue(re.match(r"^blue-mug-\d{13}$", resp.data["slug"]))
        self.assertEqual(len(resp.data["variants"]), 1)
        self.assertEqual(resp.data["image_url"], "https://cdn.example.com/mug.jpg")

    def test_update_keeps_slug(self):
        product = make_product(self.seller, name="Old Name")
        slug = product.slug

        resp = self.client.patch(
            reverse("seller-product-detail", args=[product.id]), {"name": "New Name"}, format="json"
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        product.refresh_from_db()
        self.assertEqual(product.name, "New Name")
        self.assertEqual(product.slug, slug)

    def test_list_includes_drafts_only_own(self):
        make_product(self.seller, name="Mine", status=ProductStatus.DRAFT)
        make_product(make_seller(email="x@example.com", business_name="X"), name="Theirs")

        resp = self.client.get(self.list_url)

        self.assertEqual([p["name"] for p in resp.data["results"]], ["Mine"])

    def test_delete_other_sellers_product_is_404(self):
        theirs = make_product(make_seller(email="x@example.com", business_name="X"), name="Theirs")
        resp = self.client.delete(reverse("seller-product-detail", args=[theirs.id]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_unordered_product(self):
        product = make_product(self.seller)
        resp = self.client.delete(reverse("seller-product-detail", args=[product.id]))
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(id=product.id).exists())

    def test_delete_ordered_product_is_refused(self):
        product = make_product(self.seller)
        buyer = make_user()
        CartService.add(buyer, product)
        CheckoutService.place_order(buyer, make_address(buyer).id)

        resp = self.client.delete(reverse("seller-product-detail", args=[product.id]))

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["code"], "product_has_orders")
        self.assertTrue(Product.objects.filter(id=product.id).exists())

    def test_add_variant(self):
        product = make_product(self.seller)
        resp = self.client.post(
            reverse("seller-product-variants", args=[product.id]),
            {"sku": "W-L", "name": "Large", "price": "11.00", "stock_quantity": 1},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(product.variants.count(), 1)

    def test_buyer_forbidden(self):
        self.client.force_authenticate(make_user())
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)


class SeedDemoCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_demo", stdout=StringIO())
        first = Product.objects.count()
        call_command("seed_demo", stdout=StringIO())

        self.assertGreater(first, 0)
        self.assertEqual(Product.objects.count(), first)
        self.assertFalse(Product.objects.exclude(status=ProductStatus.ACTIVE).exists())
