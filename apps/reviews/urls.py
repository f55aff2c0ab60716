from django.urls import path

from .views import ProductReviewListView, ReviewHelpfulView

urlpatterns = [
    path("products/<uuid:product_id>/", ProductReviewListView.as_view(), name="product-reviews"),
    path("<uuid:review_id>/helpful/", ReviewHelpfulView.as_view(), name="review-helpful"),
]
