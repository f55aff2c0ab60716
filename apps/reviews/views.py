from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.catalog.models import Product

from .serializers import ProductReviewSerializer, SubmitReviewSerializer
from .services import ReviewService


class ProductReviewListView(APIView):
    """
    GET  /api/v1/reviews/products/{product_id}/?rating=5
    POST /api/v1/reviews/products/{product_id}/
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, product_id):
        product = get_object_or_404(Product, id=product_id)

        rating = request.query_params.get("rating")
        rating = int(rating) if rating and rating.isdigit() else None

        reviews = ReviewService.list_reviews(product, rating=rating)
        return Response({
            "summary": ReviewService.rating_summary(product),
            "reviews": ProductReviewSerializer(reviews, many=True).data,
        })

    def post(self, request, product_id):
        product = get_object_or_404(Product, id=product_id)

        serializer = SubmitReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = ReviewService.submit_review(request.user, product, **serializer.validated_data)
        return Response(ProductReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewHelpfulView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, review_id):
        review = ReviewService.mark_helpful(review_id)
        return Response({"helpful_count": review.helpful_count})
