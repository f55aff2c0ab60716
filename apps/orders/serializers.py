from rest_framework import serializers

from .models import CartItem, Dispute, DisputeStatus, Order, OrderItem


class CartItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_image = serializers.CharField(source="product.primary_image", read_only=True)
    seller_name = serializers.CharField(source="product.seller.business_name", read_only=True)
    variant_name = serializers.CharField(source="variant.name", read_only=True, default=None)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product",
            "product_name",
            "product_image",
            "seller_name",
            "variant",
            "variant_name",
            "quantity",
            "price",
            "line_total",
            "created_at",
        ]


class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    variant_id = serializers.UUIDField(required=False, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    # 0 or less removes the line
    quantity = serializers.IntegerField()


class CheckoutSerializer(serializers.Serializer):
    address_id = serializers.UUIDField()
    payment_method = serializers.CharField(max_length=30, default="card")


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    variant_name = serializers.CharField(source="variant.name", read_only=True, default=None)
    seller_name = serializers.CharField(source="seller.business_name", read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "product_name",
            "variant",
            "variant_name",
            "seller",
            "seller_name",
            "quantity",
            "unit_price",
            "total_price",
            "status",
            "tracking_number",
        ]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "status_display",
            "payment_status",
            "total_amount",
            "currency",
            "shipping_address",
            "billing_address",
            "created_at",
            "updated_at",
            "items",
        ]


class DisputeSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source="order.order_number", read_only=True)
    raised_by_email = serializers.EmailField(source="raised_by.email", read_only=True)

    class Meta:
        model = Dispute
        fields = [
            "id",
            "order",
            "order_number",
            "raised_by_email",
            "dispute_type",
            "description",
            "status",
            "resolution",
            "created_at",
            "resolved_at",
        ]
        read_only_fields = ["id", "status", "resolution", "created_at", "resolved_at"]


class ResolveDisputeSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[DisputeStatus.RESOLVED, DisputeStatus.REJECTED])
    resolution = serializers.CharField()
