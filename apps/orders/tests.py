# apps/orders/tests.py
from decimal import Decimal
from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accounts.models import Role
from apps.payments.models import Transaction, TransactionType
from apps.utils.exceptions import BusinessLogicException
from apps.utils.testing import make_address, make_product, make_seller, make_user, make_variant

from .models import CartItem, Dispute, DisputeStatus, Order, OrderItem
from .services import CartService, CheckoutService


class CartServiceTests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        seller = make_seller()
        self.p1 = make_product(seller, name="Pen", price="10.00")
        self.p2 = make_product(seller, name="Pad", price="5.00")

    def test_summary_counts_quantity_and_total(self):
        CartService.add(self.buyer, self.p1, quantity=2)
        CartService.add(self.buyer, self.p2, quantity=1)

        summary = CartService.summary(CartService.load(self.buyer))

        self.assertEqual(summary["item_count"], 3)
        self.assertEqual(summary["total_amount"], Decimal("25.00"))

    def test_same_product_without_variant_merges(self):
        CartService.add(self.buyer, self.p1, quantity=1)
        CartService.add(self.buyer, self.p1, quantity=2)

        lines = list(CartService.load(self.buyer))
        self.assertEqual(len(lines), 1)
        self.assertEqual(lines[0].quantity, 3)

    def test_variant_lines_are_separate(self):
        small = make_variant(self.p1, "PEN-S", price="9.00")
        CartService.add(self.buyer, self.p1, quantity=1)
        CartService.add(self.buyer, self.p1, small, quantity=1)
        CartService.add(self.buyer, self.p1, small, quantity=1)

        lines = {line.variant_id: line for line in CartService.load(self.buyer)}
        self.assertEqual(len(lines), 2)
        self.assertEqual(lines[small.id].quantity, 2)
        self.assertEqual(lines[small.id].price, Decimal("9.00"))
        self.assertEqual(lines[None].quantity, 1)

    def test_quantity_zero_removes_line(self):
        item = CartService.add(self.buyer, self.p1, quantity=2)
        self.assertIsNone(CartService.update_quantity(item, 0))
        self.assertFalse(CartItem.objects.filter(user=self.buyer).exists())

    def test_inactive_product_rejected(self):
        self.p1.status = "inactive"
        self.p1.save()
        with self.assertRaises(BusinessLogicException):
            CartService.add(self.buyer, self.p1)


class CheckoutServiceTests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        # seller's own rate differs from the platform rate on purpose
        self.seller = make_seller(commission_rate=Decimal("0.15"))
        self.other_seller = make_seller(email="two@example.com", business_name="Two")
        self.p1 = make_product(self.seller, name="Pen", price="10.00")
        self.p2 = make_product(self.other_seller, name="Pad", price="5.00")
        self.address = make_address(self.buyer)

        CartService.add(self.buyer, self.p1, quantity=2)
        CartService.add(self.buyer, self.p2, quantity=1)

    def test_summary_tax_and_shipping(self):
        summary = CheckoutService.checkout_summary(self.buyer)

        self.assertEqual(summary["subtotal"], Decimal("25.00"))
        self.assertEqual(summary["tax"], Decimal("2.00"))
        self.assertEqual(summary["shipping"], Decimal("0.00"))
        self.assertEqual(summary["grand_total"], Decimal("27.00"))

    def test_place_order_writes_everything_once(self):
        order = CheckoutService.place_order(self.buyer, self.address.id)

        self.assertEqual(Order.objects.count(), 1)
        self.assertRegex(order.order_number, r"^ORD-\d+-[0-9A-Z]{9}$")
        self.assertEqual(order.total_amount, Decimal("25.00"))
        self.assertEqual(order.status, "pending")
        self.assertEqual(order.payment_status, "pending")
        self.assertEqual(order.shipping_address["city"], "Springfield")
        self.assertEqual(order.billing_address, order.shipping_address)

        items = list(OrderItem.objects.filter(order=order))
        self.assertEqual(len(items), 2)
        self.assertEqual(sum(i.total_price for i in items), order.total_amount)
        for item in items:
            self.assertEqual(item.total_price, item.unit_price * item.quantity)
            self.assertEqual(item.commission_amount, (item.total_price * Decimal("0.10")).quantize(Decimal("0.01")))
            self.assertEqual(item.status, "pending")

        txn = Transaction.objects.get(order=order)
        self.assertEqual(txn.transaction_type, TransactionType.PAYMENT)
        self.assertEqual(txn.amount, order.total_amount)
        self.assertEqual(txn.status, "pending")
        self.assertEqual(txn.payment_method, "card")

        self.assertFalse(CartItem.objects.filter(user=self.buyer).exists())

    def test_commission_ignores_seller_rate(self):
        order = CheckoutService.place_order(self.buyer, self.address.id)
        pen = OrderItem.objects.get(order=order, product=self.p1)
        self.assertEqual(pen.commission_amount, Decimal("2.00"))

    def test_failure_rolls_everything_back(self):
        with patch.object(Transaction.objects, "create", side_effect=RuntimeError("db down")):
            with self.assertLogs("apps.orders.services", level="ERROR"):
                with self.assertRaises(BusinessLogicException) as ctx:
                    CheckoutService.place_order(self.buyer, self.address.id)

        self.assertEqual(ctx.exception.message, "Failed to place order. Please try again.")
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)
        self.assertEqual(Transaction.objects.count(), 0)
        self.assertEqual(CartItem.objects.filter(user=self.buyer).count(), 2)

    def test_empty_cart(self):
        CartService.clear(self.buyer)
        with self.assertRaises(BusinessLogicException) as ctx:
            CheckoutService.place_order(self.buyer, self.address.id)
        self.assertEqual(ctx.exception.code, "empty_cart")

    def test_someone_elses_address(self):
        stranger_address = make_address(make_user(email="x@example.com"))
        with self.assertRaises(BusinessLogicException) as ctx:
            CheckoutService.place_order(self.buyer, stranger_address.id)
        self.assertEqual(ctx.exception.code, "invalid_address")


class CartAndCheckoutAPITests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        self.client.force_authenticate(self.buyer)
        self.product = make_product(make_seller(), name="Pen", price="10.00")
        self.address = make_address(self.buyer)

    def test_cart_endpoints(self):
        resp = self.client.post(reverse("cart-list"), {"product_id": str(self.product.id), "quantity": 2}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["item_count"], 2)

        item_id = resp.data["items"][0]["id"]
        resp = self.client.patch(reverse("cart-detail", args=[item_id]), {"quantity": 5}, format="json")
        self.assertEqual(resp.data["total_amount"], Decimal("50.00"))

        resp = self.client.post(reverse("cart-clear"))
        self.assertEqual(resp.data["item_count"], 0)

    def test_place_order_and_list(self):
        CartService.add(self.buyer, self.product, quantity=1)

        resp = self.client.post(reverse("checkout-place"), {"address_id": str(self.address.id)}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        order_id = resp.data["order"]["id"]

        resp = self.client.get(reverse("orders-list"))
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual(len(resp.data["results"][0]["items"]), 1)

        resp = self.client.get(reverse("orders-detail", args=[order_id]))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_empty_cart_is_business_error(self):
        resp = self.client.post(reverse("checkout-place"), {"address_id": str(self.address.id)}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["code"], "empty_cart")

    def test_idempotency_key_blocks_repeat(self):
        CartService.add(self.buyer, self.product, quantity=1)
        url = reverse("checkout-place")
        payload = {"address_id": str(self.address.id)}

        first = self.client.post(url, payload, format="json", HTTP_X_IDEMPOTENCY_KEY="abc-123")
        CartService.add(self.buyer, self.product, quantity=1)
        second = self.client.post(url, payload, format="json", HTTP_X_IDEMPOTENCY_KEY="abc-123")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(Order.objects.count(), 1)

    def test_other_buyers_order_hidden(self):
        CartService.add(self.buyer, self.product, quantity=1)
        order = CheckoutService.place_order(self.buyer, self.address.id)

        self.client.force_authenticate(make_user(email="other@example.com"))
        resp = self.client.get(reverse("orders-detail", args=[order.id]))
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)


class DisputeTests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        product = make_product(make_seller(), price="10.00")
        address = make_address(self.buyer)
        CartService.add(self.buyer, product)
        self.order = CheckoutService.place_order(self.buyer, address.id)
        self.admin = make_user(email="admin@example.com", role=Role.ADMIN)

    def test_raise_and_resolve(self):
        self.client.force_authenticate(self.buyer)
        resp = self.client.post(reverse("disputes-list"), {
            "order": str(self.order.id),
            "dispute_type": "not_received",
            "description": "Never arrived",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        dispute_id = resp.data["id"]

        # buyers can't resolve
        resp = self.client.post(reverse("disputes-resolve", args=[dispute_id]), {"status": "resolved", "resolution": "x"})
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        resp = self.client.get(reverse("disputes-admin"), {"status": "open"})
        self.assertEqual(resp.data["count"], 1)

        resp = self.client.post(
            reverse("disputes-resolve", args=[dispute_id]),
            {"status": "resolved", "resolution": "Refund issued"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        dispute = Dispute.objects.get(id=dispute_id)
        self.assertEqual(dispute.status, DisputeStatus.RESOLVED)
        self.assertIsNotNone(dispute.resolved_at)

    def test_cannot_dispute_someone_elses_order(self):
        self.client.force_authenticate(make_user(email="other@example.com"))
        resp = self.client.post(reverse("disputes-list"), {
            "order": str(self.order.id),
            "dispute_type": "fraud",
            "description": "Not mine",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_only_buyers_raise_disputes(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(reverse("disputes-list"), {
            "order": str(self.order.id),
            "dispute_type": "fraud",
            "description": "Checking",
        }, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Dispute.objects.exists())
