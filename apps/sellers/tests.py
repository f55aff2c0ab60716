from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import Role
from apps.orders.models import FulfillmentStatus, Order, OrderItem
from apps.utils.exceptions import BusinessLogicException
from apps.utils.testing import make_product, make_seller, make_user

from .models import Seller, VerificationStatus
from .services import SellerService


def place_item(seller, buyer, product, quantity=1, price="10.00", number="ORD-1"):
    order = Order.objects.create(
        order_number=number,
        buyer=buyer,
        total_amount=Decimal(price) * quantity,
        shipping_address={"city": "Springfield"},
    )
    total = Decimal(price) * quantity
    return OrderItem.objects.create(
        order=order,
        seller=seller,
        product=product,
        quantity=quantity,
        unit_price=Decimal(price),
        total_price=total,
        commission_amount=total * Decimal("0.10"),
    )


class OnboardingTests(APITestCase):
    url = reverse("seller-onboarding")

    def setUp(self):
        self.user = make_user(email="maker@example.com")
        self.client.force_authenticate(self.user)
        self.payload = {
            "business_name": "Maker Co",
            "business_type": "handmade",
            "description": "Hand made things",
            "phone": "+1 555 0199",
        }

    def test_onboarding_creates_pending_seller(self):
        resp = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        seller = Seller.objects.get(user=self.user)
        self.assertEqual(seller.verification_status, VerificationStatus.PENDING)
        self.assertEqual(seller.trust_score, Decimal("5.0"))
        self.assertEqual(seller.total_sales, Decimal("0.00"))
        self.assertEqual(seller.commission_rate, Decimal("0.1000"))
        self.assertEqual(seller.status, "active")

        self.user.refresh_from_db()
        self.assertEqual(self.user.phone, "+1 555 0199")
        self.assertEqual(self.user.role, Role.SELLER)

    def test_second_onboarding_rejected(self):
        self.client.post(self.url, self.payload, format="json")
        resp = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["code"], "already_onboarded")


class SellerOrderManagementTests(APITestCase):
    def setUp(self):
        self.seller = make_seller()
        self.other_seller = make_seller(email="rival@example.com", business_name="Rival")
        self.buyer = make_user(full_name="Jane Shopper")
        self.product = make_product(self.seller, name="Teapot")
        self.item = place_item(self.seller, self.buyer, self.product, quantity=2, number="ORD-100")
        place_item(
            self.other_seller, self.buyer, make_product(self.other_seller, name="Mug"), number="ORD-200"
        )

    def test_dashboard_stats(self):
        stats = SellerService.dashboard_stats(self.seller)
        self.assertEqual(stats["total_products"], 1)
        self.assertEqual(stats["total_orders"], 1)
        self.assertEqual(stats["pending_orders"], 1)
        self.assertEqual(stats["total_revenue"], Decimal("20.00"))

    def test_list_only_own_items_with_search(self):
        self.client.force_authenticate(self.seller.user)
        url = reverse("seller-order-items")

        resp = self.client.get(url)
        self.assertEqual(resp.data["count"], 1)

        resp = self.client.get(url, {"search": "jane"})
        self.assertEqual(resp.data["count"], 1)

        resp = self.client.get(url, {"search": "ORD-200"})
        self.assertEqual(resp.data["count"], 0)

        resp = self.client.get(url, {"status": "shipped"})
        self.assertEqual(resp.data["count"], 0)

    def test_update_status_with_tracking(self):
        self.client.force_authenticate(self.seller.user)
        url = reverse("seller-order-item-status", args=[self.item.id])

        resp = self.client.patch(url, {"status": "shipped", "tracking_number": "1Z999"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.item.refresh_from_db()
        self.assertEqual(self.item.status, FulfillmentStatus.SHIPPED)
        self.assertEqual(self.item.tracking_number, "1Z999")

    def test_other_seller_cannot_update(self):
        self.client.force_authenticate(self.other_seller.user)
        url = reverse("seller-order-item-status", args=[self.item.id])

        resp = self.client.patch(url, {"status": "delivered"}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_invalid_status_rejected_by_service(self):
        with self.assertRaises(BusinessLogicException):
            SellerService.update_order_item_status(self.seller, self.item.id, "teleported")

    def test_buyer_cannot_access_seller_endpoints(self):
        self.client.force_authenticate(self.buyer)
        resp = self.client.get(reverse("seller-order-items"))
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)


class AdminVerificationTests(APITestCase):
    def setUp(self):
        self.admin = make_user(email="admin@example.com", role=Role.ADMIN)
        self.pending = make_seller(verification_status=VerificationStatus.PENDING)
        make_seller(email="ok@example.com", business_name="Verified Co")

    def test_filter_pending_and_verify(self):
        self.client.force_authenticate(self.admin)

        resp = self.client.get(reverse("admin-sellers"), {"verification_status": "pending"})
        self.assertEqual(resp.data["count"], 1)

        resp = self.client.post(
            reverse("admin-seller-verification", args=[self.pending.id]),
            {"verification_status": "verified"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.verification_status, VerificationStatus.VERIFIED)

    def test_seller_cannot_verify(self):
        self.client.force_authenticate(self.pending.user)
        resp = self.client.post(
            reverse("admin-seller-verification", args=[self.pending.id]),
            {"verification_status": "verified"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
