import logging

from django.conf import settings
from django.core.cache import cache
from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin, IsBuyer
from apps.catalog.models import Product, ProductVariant
from apps.utils.exceptions import BusinessLogicException

from .serializers import (
    AddToCartSerializer,
    CartItemSerializer,
    CheckoutSerializer,
    DisputeSerializer,
    OrderSerializer,
    ResolveDisputeSerializer,
    UpdateCartItemSerializer,
)
from .services import CartService, CheckoutService, DisputeService, OrderService

logger = logging.getLogger(__name__)


def cart_payload(user) -> dict:
    items = list(CartService.load(user))
    return {
        "items": CartItemSerializer(items, many=True).data,
        **CartService.summary(items),
    }


class CartViewSet(viewsets.ViewSet):
    """
    /cart/              GET list, POST add
    /cart/{id}/         PATCH quantity, DELETE line
    /cart/clear/        POST
    """
    permission_classes = [IsAuthenticated]

    def list(self, request):
        return Response(cart_payload(request.user))

    def create(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = get_object_or_404(Product, id=data["product_id"])
        variant = None
        if data.get("variant_id"):
            variant = get_object_or_404(ProductVariant, id=data["variant_id"])

        CartService.add(request.user, product, variant, data["quantity"])
        return Response(cart_payload(request.user), status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = CartService.get_item(request.user, pk)
        CartService.update_quantity(item, serializer.validated_data["quantity"])
        return Response(cart_payload(request.user))

    def destroy(self, request, pk=None):
        CartService.remove(CartService.get_item(request.user, pk))
        return Response(cart_payload(request.user))

    @action(detail=False, methods=["post"])
    def clear(self, request):
        CartService.clear(request.user)
        return Response(cart_payload(request.user))


class CheckoutViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=["get"])
    def summary(self, request):
        return Response(CheckoutService.checkout_summary(request.user))

    @action(detail=False, methods=["post"])
    def place(self, request):
        """
        Places the order from the current cart.

        Optional `X-Idempotency-Key`: a repeat of the same key within the TTL
        gets 409 instead of a second order.
        """
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cache_key = None
        idempotency_key = request.headers.get("X-Idempotency-Key")
        if idempotency_key:
            cache_key = f"checkout_idempotency_{request.user.id}_{idempotency_key}"
            if not cache.add(cache_key, "processing", timeout=settings.CHECKOUT_IDEMPOTENCY_TTL):
                return Response(
                    {"error": "Duplicate request detected", "code": "duplicate_request"},
                    status=status.HTTP_409_CONFLICT,
                )

        try:
            order = CheckoutService.place_order(
                request.user,
                serializer.validated_data["address_id"],
                payment_method=serializer.validated_data["payment_method"],
            )
        except BusinessLogicException:
            # release the key so the buyer can retry after fixing the problem
            if cache_key:
                cache.delete(cache_key)
            raise

        return Response({
            "message": "Order placed successfully",
            "order": OrderSerializer(order).data,
        }, status=status.HTTP_201_CREATED)


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    lookup_value_regex = "[0-9a-f-]{36}"
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return OrderService.buyer_orders(self.request.user)

    def retrieve(self, request, pk=None):
        order = OrderService.get_buyer_order(request.user, pk)
        return Response(OrderSerializer(order).data)


class DisputeViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Buyers list/raise their own disputes; admins list all and resolve.
    """
    serializer_class = DisputeSerializer
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == "create":
            return [IsBuyer()]
        if self.action in ("admin", "resolve"):
            return [IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        return DisputeService.buyer_disputes(self.request.user)

    def create(self, request):
        serializer = DisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dispute = DisputeService.raise_dispute(
            request.user,
            serializer.validated_data["order"].id,
            serializer.validated_data["dispute_type"],
            serializer.validated_data["description"],
        )
        return Response(DisputeSerializer(dispute).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["get"])
    def admin(self, request):
        qs = DisputeService.all_disputes(request.query_params.get("status"))
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(DisputeSerializer(page, many=True).data)
        return Response(DisputeSerializer(qs, many=True).data)

    @action(detail=True, methods=["post"])
    def resolve(self, request, pk=None):
        serializer = ResolveDisputeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dispute = DisputeService.resolve(pk, **serializer.validated_data)
        return Response(DisputeSerializer(dispute).data)
