import logging
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Avg, Count, F
from rest_framework.exceptions import NotFound

from apps.catalog.models import Product
from apps.orders.models import OrderItem

from .models import ProductReview

logger = logging.getLogger(__name__)


class ReviewService:

    @staticmethod
    @transaction.atomic
    def submit_review(user, product: Product, rating: int, title: str = "", comment: str = "", order_item_id=None) -> ProductReview:
        """
        Saves the review, then recomputes the product's rating average/count
        from all of its reviews.
        """
        order_item = None
        if order_item_id:
            # only the buyer's own purchase of this product counts as verified
            order_item = OrderItem.objects.filter(
                id=order_item_id, order__buyer=user, product=product
            ).first()

        review = ProductReview.objects.create(
            product=product,
            user=user,
            order_item=order_item,
            rating=rating,
            title=title,
            comment=comment,
            verified_purchase=order_item is not None,
        )

        ReviewService.refresh_product_rating(product)
        logger.info("Review %s submitted for product %s", review.id, product.id, extra={"user_id": user.id})
        return review

    @staticmethod
    def refresh_product_rating(product: Product) -> None:
        product = Product.objects.select_for_update().get(id=product.id)
        agg = ProductReview.objects.filter(product=product).aggregate(avg=Avg("rating"), count=Count("id"))
        product.rating_average = Decimal(str(round(agg["avg"] or 0, 2)))
        product.rating_count = agg["count"]
        product.save(update_fields=["rating_average", "rating_count"])

    @staticmethod
    def list_reviews(product: Product, rating: int | None = None):
        qs = ProductReview.objects.filter(product=product).select_related("user").order_by("-created_at")
        if rating:
            qs = qs.filter(rating=rating)
        return qs

    @staticmethod
    def rating_summary(product: Product) -> dict:
        counts = dict(
            ProductReview.objects.filter(product=product)
            .order_by()
            .values_list("rating")
            .annotate(n=Count("id"))
        )
        return {
            "rating_average": product.rating_average,
            "rating_count": product.rating_count,
            "distribution": {star: counts.get(star, 0) for star in range(5, 0, -1)},
        }

    @staticmethod
    def mark_helpful(review_id) -> ProductReview:
        try:
            review = ProductReview.objects.get(id=review_id)
        except (ProductReview.DoesNotExist, DjangoValidationError):
            raise NotFound("Review not found.")

        ProductReview.objects.filter(id=review.id).update(helpful_count=F("helpful_count") + 1)
        review.refresh_from_db(fields=["helpful_count"])
        return review
