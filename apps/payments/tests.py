from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.orders.services import CartService, CheckoutService
from apps.utils.testing import make_address, make_product, make_seller, make_user

from .models import Transaction, TransactionStatus, TransactionType


class TransactionListTests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        product = make_product(make_seller(), price="42.00")
        CartService.add(self.buyer, product)
        self.order = CheckoutService.place_order(self.buyer, make_address(self.buyer).id, payment_method="paypal")

    def test_one_pending_payment_per_order(self):
        txn = Transaction.objects.get(order=self.order)
        self.assertEqual(txn.transaction_type, TransactionType.PAYMENT)
        self.assertEqual(txn.status, TransactionStatus.PENDING)
        self.assertEqual(txn.amount, Decimal("42.00"))
        self.assertEqual(txn.payment_method, "paypal")
        self.assertEqual(txn.currency, "USD")

    def test_buyer_sees_only_own_transactions(self):
        self.client.force_authenticate(self.buyer)
        resp = self.client.get(reverse("my-transactions"))
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["count"], 1)
        self.assertEqual(resp.data["results"][0]["order_number"], self.order.order_number)

        self.client.force_authenticate(make_user(email="other@example.com"))
        resp = self.client.get(reverse("my-transactions"))
        self.assertEqual(resp.data["count"], 0)
