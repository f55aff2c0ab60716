from rest_framework import serializers

from apps.utils.validators import validate_rating

from .models import ProductReview


class ProductReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.full_name", read_only=True)

    class Meta:
        model = ProductReview
        fields = [
            "id",
            "product",
            "user_name",
            "rating",
            "title",
            "comment",
            "verified_purchase",
            "helpful_count",
            "created_at",
        ]
        read_only_fields = fields


class SubmitReviewSerializer(serializers.Serializer):
    rating = serializers.IntegerField(validators=[validate_rating])
    title = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    comment = serializers.CharField(required=False, allow_blank=True, default="")
    order_item_id = serializers.UUIDField(required=False, allow_null=True)
