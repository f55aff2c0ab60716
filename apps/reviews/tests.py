from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.orders.services import CartService, CheckoutService
from apps.utils.testing import make_address, make_product, make_seller, make_user

from .models import ProductReview
from .services import ReviewService


class ReviewServiceTests(APITestCase):
    def setUp(self):
        self.buyer = make_user()
        self.product = make_product(make_seller(), name="Kettle")
        CartService.add(self.buyer, self.product)
        order = CheckoutService.place_order(self.buyer, make_address(self.buyer).id)
        self.order_item = order.items.get()

    def test_verified_purchase_and_rating_average(self):
        review = ReviewService.submit_review(
            self.buyer, self.product, rating=5, title="Great", order_item_id=self.order_item.id
        )
        ReviewService.submit_review(make_user(email="b@example.com"), self.product, rating=2)

        self.assertTrue(review.verified_purchase)
        self.product.refresh_from_db()
        self.assertEqual(self.product.rating_count, 2)
        self.assertEqual(self.product.rating_average, Decimal("3.50"))

    def test_someone_elses_order_item_is_not_verified(self):
        stranger = make_user(email="stranger@example.com")
        review = ReviewService.submit_review(stranger, self.product, rating=4, order_item_id=self.order_item.id)
        self.assertFalse(review.verified_purchase)
        self.assertIsNone(review.order_item)

    def test_list_newest_first_with_filter(self):
        older = ReviewService.submit_review(self.buyer, self.product, rating=5)
        ReviewService.submit_review(make_user(email="b@example.com"), self.product, rating=3)
        ProductReview.objects.filter(id=older.id).update(created_at=timezone.now() - timedelta(days=1))

        ratings = [r.rating for r in ReviewService.list_reviews(self.product)]
        self.assertEqual(ratings, [3, 5])
        self.assertEqual([r.rating for r in ReviewService.list_reviews(self.product, rating=5)], [5])


class ReviewAPITests(APITestCase):
    def setUp(self):
        self.product = make_product(make_seller())
        self.url = reverse("product-reviews", args=[self.product.id])

    def test_anonymous_can_read_but_not_write(self):
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_200_OK)
        resp = self.client.post(self.url, {"rating": 5}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_submit_and_summary(self):
        self.client.force_authenticate(make_user())
        resp = self.client.post(self.url, {"rating": 4, "comment": "Solid"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertFalse(resp.data["verified_purchase"])

        resp = self.client.get(self.url)
        self.assertEqual(resp.data["summary"]["rating_count"], 1)
        self.assertEqual(resp.data["summary"]["distribution"][4], 1)
        self.assertEqual(len(resp.data["reviews"]), 1)

    def test_rating_out_of_range(self):
        self.client.force_authenticate(make_user())
        resp = self.client.post(self.url, {"rating": 6}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mark_helpful(self):
        user = make_user()
        review = ReviewService.submit_review(user, self.product, rating=5)
        self.client.force_authenticate(user)

        self.client.post(reverse("review-helpful", args=[review.id]))
        resp = self.client.post(reverse("review-helpful", args=[review.id]))

        self.assertEqual(resp.data["helpful_count"], 2)
        self.assertEqual(ProductReview.objects.get(id=review.id).helpful_count, 2)
