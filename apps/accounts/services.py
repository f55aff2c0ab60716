import logging

from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User, Role

logger = logging.getLogger(__name__)


class AuthService:

    @staticmethod
    def issue_tokens(user: User) -> dict:
        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
        }

    @staticmethod
    @transaction.atomic
    def register(email: str, password: str, full_name: str, role: str = Role.BUYER) -> dict:
        user = User.objects.create_user(
            email=email,
            password=password,
            full_name=full_name,
            role=role,
        )
        logger.info("Registered %s user %s", role, user.id, extra={"user_id": user.id})
        return {"user": user, **AuthService.issue_tokens(user)}


class DashboardService:
    """
    Role-based view selection: the current role decides which dashboard renders.
    """

    @staticmethod
    def for_user(user: User) -> dict:
        if user.is_platform_admin:
            from apps.analytics.services import admin_stats
            return {"role": Role.ADMIN, "dashboard": admin_stats()}

        if user.role == Role.SELLER:
            from apps.sellers.services import SellerService
            seller = SellerService.get_for_user(user)
            if seller is None:
                return {"role": Role.SELLER, "dashboard": {"onboarding_required": True}}
            return {"role": Role.SELLER, "dashboard": SellerService.dashboard_stats(seller)}

        from apps.catalog.services import ProductService
        from apps.catalog.serializers import ProductListSerializer
        products = ProductService.buyer_feed()
        return {
            "role": Role.BUYER,
            "dashboard": {"products": ProductListSerializer(products, many=True).data},
        }
