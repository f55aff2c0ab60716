# apps/analytics/views.py
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsAdmin, IsSeller
from apps.sellers.services import SellerService

from .serializers import TimeRangeSerializer
from .services import admin_stats, seller_analytics


class SellerAnalyticsView(APIView):
    """
    GET /api/v1/analytics/seller/?range=7d|30d|90d|all
    """
    permission_classes = [IsSeller]

    def get(self, request):
        query = TimeRangeSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        seller = SellerService.require_for_user(request.user)
        return Response(seller_analytics(seller, query.validated_data["range"]))


class AdminStatsView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(admin_stats())
