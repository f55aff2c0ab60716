from rest_framework import serializers

from apps.orders.models import FulfillmentStatus, OrderItem
from apps.utils.validators import validate_phone

from .models import Seller, SellerPayout, VerificationStatus


class SellerOnboardingSerializer(serializers.Serializer):
    business_name = serializers.CharField(max_length=255)
    business_type = serializers.CharField(max_length=100)
    description = serializers.CharField()
    phone = serializers.CharField(max_length=20, validators=[validate_phone])


class SellerSerializer(serializers.ModelSerializer):
    owner_email = serializers.EmailField(source="user.email", read_only=True)
    owner_name = serializers.CharField(source="user.full_name", read_only=True)

    class Meta:
        model = Seller
        fields = [
            "id",
            "business_name",
            "business_type",
            "description",
            "logo_url",
            "verification_status",
            "trust_score",
            "total_sales",
            "commission_rate",
            "status",
            "owner_email",
            "owner_name",
            "created_at",
        ]
        read_only_fields = fields


class SellerVerificationSerializer(serializers.Serializer):
    verification_status = serializers.ChoiceField(choices=VerificationStatus.choices)


class SellerOrderItemSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.order_number", read_only=True)
    order_created_at = serializers.DateTimeField(source="order.created_at", read_only=True)
    shipping_address = serializers.JSONField(source="order.shipping_address", read_only=True)
    buyer_name = serializers.CharField(source="order.buyer.full_name", read_only=True)
    buyer_email = serializers.EmailField(source="order.buyer.email", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    variant_name = serializers.CharField(source="variant.name", read_only=True, default=None)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_number",
            "order_created_at",
            "buyer_name",
            "buyer_email",
            "shipping_address",
            "product",
            "product_name",
            "variant",
            "variant_name",
            "quantity",
            "unit_price",
            "total_price",
            "commission_amount",
            "status",
            "tracking_number",
        ]
        read_only_fields = fields


class OrderItemStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=FulfillmentStatus.choices)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)


class SellerPayoutSerializer(serializers.ModelSerializer):
    class Meta:
        model = SellerPayout
        fields = ["id", "amount", "currency", "status", "payout_date", "reference", "created_at"]
        read_only_fields = fields
