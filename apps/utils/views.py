# apps/utils/views.py
from django.conf import settings
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class ServerInfoView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "app_name": "Dolese",
            "version": "1.0.0",
            "debug": settings.DEBUG,
        })


class GlobalConfigView(APIView):
    """
    Checkout ke numbers (tax, shipping, currency) frontend ko bhejne ke liye.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "currency": settings.DEFAULT_CURRENCY,
            "tax_rate": settings.CHECKOUT_TAX_RATE,
            "shipping_cost": settings.CHECKOUT_SHIPPING_COST,
            "platform_commission_rate": settings.PLATFORM_COMMISSION_RATE,
        })
