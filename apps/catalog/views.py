from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.accounts.permissions import IsSeller
from apps.sellers.services import SellerService

from .serializers import (
    CategorySerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductQuerySerializer,
    ProductVariantSerializer,
    ProductWriteSerializer,
)
from .services import ProductService


class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Publicly accessible category list.
    """
    serializer_class = CategorySerializer
    permission_classes = [AllowAny]
    pagination_class = None

    def get_queryset(self):
        return ProductService.list_categories()


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public catalogue: only active products.

    GET /products/?search=&category=<id>,<id>&min_price=&max_price=&min_rating=&in_stock=true&sort=price-low
    """
    permission_classes = [AllowAny]
    serializer_class = ProductListSerializer

    def get_queryset(self):
        query = ProductQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return ProductService.search_products(**query.to_service_kwargs())

    def retrieve(self, request, pk=None):
        product = ProductService.get_public_product(pk)
        return Response(ProductDetailSerializer(product).data)

    @action(detail=False, methods=["get"])
    def feed(self, request):
        products = ProductService.buyer_feed(search=request.query_params.get("search"))
        return Response(ProductListSerializer(products, many=True).data)


class SellerProductViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    Seller product manager. Lists every status, not just active.
    """
    permission_classes = [IsSeller]
    serializer_class = ProductDetailSerializer
    filterset_fields = ["status", "category"]

    def get_seller(self):
        return SellerService.require_for_user(self.request.user)

    def get_queryset(self):
        return ProductService.seller_products(self.get_seller())

    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = ProductService.create_product(self.get_seller(), **serializer.validated_data)
        return Response(ProductDetailSerializer(product).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        product = ProductService.get_seller_product(self.get_seller(), pk)
        return Response(ProductDetailSerializer(product).data)

    def partial_update(self, request, pk=None):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        data.pop("variants", None)
        product = ProductService.update_product(self.get_seller(), pk, **data)
        return Response(ProductDetailSerializer(product).data)

    def destroy(self, request, pk=None):
        ProductService.delete_product(self.get_seller(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def variants(self, request, pk=None):
        serializer = ProductVariantSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        variant = ProductService.add_variant(self.get_seller(), pk, **serializer.validated_data)
        return Response(ProductVariantSerializer(variant).data, status=status.HTTP_201_CREATED)
