from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsAdmin, IsSeller

from .serializers import (
    OrderItemStatusSerializer,
    SellerOnboardingSerializer,
    SellerOrderItemSerializer,
    SellerPayoutSerializer,
    SellerSerializer,
    SellerVerificationSerializer,
)
from .services import SellerService


class SellerOnboardingView(APIView):
    """
    POST /api/v1/sellers/onboarding/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SellerOnboardingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seller = SellerService.onboard(request.user, **serializer.validated_data)
        return Response({
            "message": "Seller account created successfully! Your account is pending verification.",
            "seller": SellerSerializer(seller).data,
        }, status=status.HTTP_201_CREATED)


class SellerMeView(APIView):
    """
    GET /api/v1/sellers/me/ -> seller profile + dashboard stats
    """
    permission_classes = [IsSeller]

    def get(self, request):
        seller = SellerService.get_for_user(request.user)
        if seller is None:
            return Response({"onboarding_required": True})
        return Response({
            "seller": SellerSerializer(seller).data,
            "stats": SellerService.dashboard_stats(seller),
        })


class SellerOrderItemListView(generics.ListAPIView):
    """
    GET /api/v1/sellers/order-items/?status=pending&search=ORD-
    """
    permission_classes = [IsSeller]
    serializer_class = SellerOrderItemSerializer

    def get_queryset(self):
        seller = SellerService.require_for_user(self.request.user)
        return SellerService.list_order_items(
            seller,
            status=self.request.query_params.get("status"),
            search=self.request.query_params.get("search"),
        )


class SellerOrderItemStatusView(APIView):
    """
    PATCH /api/v1/sellers/order-items/{id}/status/
    """
    permission_classes = [IsSeller]

    def patch(self, request, pk):
        serializer = OrderItemStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seller = SellerService.require_for_user(request.user)
        item = SellerService.update_order_item_status(
            seller,
            pk,
            serializer.validated_data["status"],
            tracking_number=serializer.validated_data.get("tracking_number") or None,
        )
        return Response(SellerOrderItemSerializer(item).data)


class SellerPayoutListView(generics.ListAPIView):
    permission_classes = [IsSeller]
    serializer_class = SellerPayoutSerializer

    def get_queryset(self):
        seller = SellerService.require_for_user(self.request.user)
        return SellerService.list_payouts(seller)


class AdminSellerListView(generics.ListAPIView):
    """
    GET /api/v1/sellers/admin/?verification_status=pending
    """
    permission_classes = [IsAdmin]
    serializer_class = SellerSerializer

    def get_queryset(self):
        return SellerService.list_sellers(
            self.request.query_params.get("verification_status")
        )


class AdminSellerVerificationView(APIView):
    """
    POST /api/v1/sellers/admin/{id}/verification/
    """
    permission_classes = [IsAdmin]

    def post(self, request, pk):
        serializer = SellerVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seller = SellerService.set_verification(pk, serializer.validated_data["verification_status"])
        return Response(SellerSerializer(seller).data)
