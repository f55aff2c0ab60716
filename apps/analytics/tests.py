# apps/analytics/tests.py
from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import Role
from apps.catalog.models import Product
from apps.orders.models import Order, OrderItem
from apps.sellers.models import Seller
from apps.utils.testing import make_product, make_seller, make_user

from .services import _month_start, admin_stats, refresh_seller_totals, seller_analytics
from .tasks import refresh_seller_totals_task


class AnalyticsFixtureMixin:
    def setUp(self):
        self.now = timezone.now()
        self.seller = make_seller()
        self.buyer = make_user()
        self.lamp = make_product(self.seller, name="Lamp", price="20.00")
        self.rug = make_product(self.seller, name="Rug", price="100.00")
        Product.objects.filter(id=self.lamp.id).update(view_count=7)
        Product.objects.filter(id=self.rug.id).update(view_count=3)

    def sell(self, product, quantity, days_ago, number):
        total = product.base_price * quantity
        order = Order.objects.create(
            order_number=number,
            buyer=self.buyer,
            total_amount=total,
            shipping_address={},
        )
        Order.objects.filter(id=order.id).update(created_at=self.now - timedelta(days=days_ago))
        return OrderItem.objects.create(
            order=order,
            seller=product.seller,
            product=product,
            quantity=quantity,
            unit_price=product.base_price,
            total_price=total,
            commission_amount=total * Decimal("0.10"),
        )


class SellerAnalyticsTests(AnalyticsFixtureMixin, APITestCase):

    def test_window_totals_and_change(self):
        self.sell(self.lamp, 2, days_ago=1, number="ORD-A")    # 40, current 7d
        self.sell(self.rug, 1, days_ago=3, number="ORD-B")     # 100, current 7d
        self.sell(self.lamp, 1, days_ago=10, number="ORD-C")   # 20, previous 7d
        self.sell(self.rug, 1, days_ago=40, number="ORD-D")    # outside both

        data = seller_analytics(self.seller, "7d", now=self.now)

        self.assertEqual(data["total_revenue"], Decimal("140.00"))
        self.assertEqual(data["total_orders"], 2)
        self.assertEqual(data["total_products"], 2)
        self.assertEqual(data["total_views"], 10)
        self.assertEqual(data["revenue_change"], 600.0)
        self.assertEqual(data["orders_change"], 100.0)
        self.assertEqual(data["recent_orders"][0]["order_number"], "ORD-A")

        top = data["top_products"]
        self.assertEqual([p["name"] for p in top], ["Rug", "Lamp"])
        self.assertEqual(top[1]["sales"], 2)

    def test_change_is_zero_without_previous_revenue(self):
        self.sell(self.lamp, 1, days_ago=2, number="ORD-A")

        data = seller_analytics(self.seller, "30d", now=self.now)

        self.assertEqual(data["total_revenue"], Decimal("20.00"))
        self.assertEqual(data["revenue_change"], 0)
        self.assertEqual(data["orders_change"], 0)

    def test_all_time_has_no_comparison(self):
        self.sell(self.lamp, 1, days_ago=2, number="ORD-A")
        self.sell(self.rug, 1, days_ago=400, number="ORD-B")

        data = seller_analytics(self.seller, "all", now=self.now)

        self.assertEqual(data["total_revenue"], Decimal("120.00"))
        self.assertEqual(data["revenue_change"], 0)

    def test_monthly_revenue_six_months_oldest_first(self):
        self.sell(self.lamp, 1, days_ago=0, number="ORD-A")

        months = seller_analytics(self.seller, "30d", now=self.now)["monthly_revenue"]

        self.assertEqual(len(months), 6)
        self.assertEqual(months[-1]["month"], self.now.strftime("%b"))
        self.assertEqual(months[-1]["revenue"], Decimal("20.00"))
        self.assertEqual(months[0]["month"], _month_start(self.now, 5).strftime("%b"))
        self.assertEqual(months[0]["revenue"], Decimal("0.00"))

    def test_month_start_crosses_year(self):
        jan = self.now.replace(year=2025, month=1, day=15)
        self.assertEqual(_month_start(jan, 1).strftime("%Y-%m-%d"), "2024-12-01")
        self.assertEqual(_month_start(jan, -1).strftime("%Y-%m-%d"), "2025-02-01")

    def test_endpoint_validates_range(self):
        self.client.force_authenticate(self.seller.user)
        url = reverse("analytics-seller")

        self.assertEqual(self.client.get(url, {"range": "90d"}).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(url, {"range": "1y"}).status_code, status.HTTP_400_BAD_REQUEST)


class AdminStatsTests(AnalyticsFixtureMixin, APITestCase):

    def test_platform_totals(self):
        make_seller(email="pending@example.com", business_name="Pending", verification_status="pending")
        self.sell(self.lamp, 1, days_ago=1, number="ORD-A")
        self.sell(self.rug, 2, days_ago=1, number="ORD-B")

        stats = admin_stats()

        self.assertEqual(stats["total_users"], 3)
        self.assertEqual(stats["total_sellers"], 2)
        self.assertEqual(stats["pending_verifications"], 1)
        self.assertEqual(stats["total_products"], 2)
        self.assertEqual(stats["total_orders"], 2)
        self.assertEqual(stats["total_revenue"], Decimal("220.00"))

    def test_endpoint_admin_only(self):
        url = reverse("analytics-admin-stats")
        self.client.force_authenticate(self.buyer)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(make_user(email="admin@example.com", role=Role.ADMIN))
        self.assertEqual(self.client.get(url).status_code, status.HTTP_200_OK)


class RefreshTotalsTests(AnalyticsFixtureMixin, APITestCase):

    def test_task_recomputes_totals(self):
        self.sell(self.lamp, 3, days_ago=1, number="ORD-A")
        self.sell(self.rug, 1, days_ago=1, number="ORD-B")

        refresh_seller_totals_task.delay()

        self.assertEqual(Seller.objects.get(id=self.seller.id).total_sales, Decimal("160.00"))
        self.assertEqual(Product.objects.get(id=self.lamp.id).sales_count, 3)

    def test_second_run_changes_nothing(self):
        self.sell(self.lamp, 1, days_ago=1, number="ORD-A")
        self.assertEqual(refresh_seller_totals(), 1)
        self.assertEqual(refresh_seller_totals(), 0)
