# apps/catalog/serializers.py
from rest_framework import serializers

from .models import Category, Product, ProductImage, ProductVariant
from .services import SORT_ORDERINGS


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "parent", "description", "image_url", "sort_order"]


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ["id", "image_url", "sort_order", "is_primary"]


class ProductVariantSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductVariant
        fields = ["id", "sku", "name", "attributes", "price", "stock_quantity", "status"]
        read_only_fields = ["id"]


class ProductListSerializer(serializers.ModelSerializer):
    seller_name = serializers.CharField(source="seller.business_name", read_only=True)
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    image_url = serializers.CharField(source="primary_image", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "base_price",
            "currency",
            "featured",
            "rating_average",
            "rating_count",
            "sales_count",
            "seller",
            "seller_name",
            "category",
            "category_name",
            "image_url",
            "created_at",
        ]


class ProductDetailSerializer(ProductListSerializer):
    images = ProductImageSerializer(many=True, read_only=True)
    variants = ProductVariantSerializer(many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            "description",
            "status",
            "view_count",
            "images",
            "variants",
            "updated_at",
        ]


class ProductWriteSerializer(serializers.ModelSerializer):
    """
    Seller-side create/update. Variants are only accepted on create.
    """
    variants = ProductVariantSerializer(many=True, required=False)
    image_urls = serializers.ListField(child=serializers.URLField(), required=False)

    class Meta:
        model = Product
        fields = [
            "name",
            "description",
            "base_price",
            "currency",
            "category",
            "status",
            "featured",
            "variants",
            "image_urls",
        ]
        extra_kwargs = {"category": {"required": False, "allow_null": True}}

    def validate_base_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value


class ProductQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ListField(child=serializers.CharField(), required=False)
    min_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    min_rating = serializers.DecimalField(max_digits=3, decimal_places=2, required=False, min_value=0, max_value=5)
    in_stock = serializers.BooleanField(required=False, default=False)
    sort = serializers.ChoiceField(choices=list(SORT_ORDERINGS), required=False, default="newest")

    def validate_category(self, value):
        # ?category=a,b and ?category=a&category=b are both accepted
        ids = []
        for raw in value:
            ids.extend(part.strip() for part in raw.split(",") if part.strip())
        field = serializers.UUIDField()
        return [field.to_internal_value(item) for item in ids]

    def to_service_kwargs(self) -> dict:
        data = self.validated_data
        return {
            "search": data.get("search") or None,
            "categories": data.get("category") or None,
            "min_price": data.get("min_price"),
            "max_price": data.get("max_price"),
            "min_rating": data.get("min_rating"),
            "in_stock": data.get("in_stock", False),
            "sort": data.get("sort", "newest"),
        }
