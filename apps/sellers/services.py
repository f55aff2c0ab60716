import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q, Sum
from rest_framework.exceptions import NotFound

from apps.accounts.models import Role
from apps.utils.exceptions import BusinessLogicException
from apps.catalog.models import Product
from apps.orders.models import OrderItem, FulfillmentStatus

from .models import Seller, VerificationStatus

logger = logging.getLogger(__name__)


class SellerService:

    @staticmethod
    def get_for_user(user):
        return Seller.objects.filter(user=user).first()

    @staticmethod
    def require_for_user(user) -> Seller:
        seller = SellerService.get_for_user(user)
        if seller is None:
            raise BusinessLogicException(
                "Complete seller onboarding first.", code="onboarding_required"
            )
        return seller

    @staticmethod
    @transaction.atomic
    def onboard(user, business_name: str, business_type: str, description: str, phone: str) -> Seller:
        """
        Creates the seller profile (pending verification) and stores the phone
        on the user's profile.
        """
        if Seller.objects.filter(user=user).exists():
            raise BusinessLogicException("Seller account already exists.", code="already_onboarded")

        seller = Seller.objects.create(
            user=user,
            business_name=business_name,
            business_type=business_type,
            description=description,
            verification_status=VerificationStatus.PENDING,
            trust_score=settings.DEFAULT_SELLER_TRUST_SCORE,
            total_sales=Decimal("0.00"),
            commission_rate=settings.DEFAULT_SELLER_COMMISSION_RATE,
            status="active",
        )

        user.phone = phone
        if user.role == Role.BUYER:
            user.role = Role.SELLER
        user.save(update_fields=["phone", "role", "updated_at"])

        logger.info("Seller %s onboarded, pending verification", seller.id, extra={"seller_id": seller.id})
        return seller

    @staticmethod
    def dashboard_stats(seller: Seller) -> dict:
        items = OrderItem.objects.filter(seller=seller)
        return {
            "seller_id": str(seller.id),
            "business_name": seller.business_name,
            "verification_status": seller.verification_status,
            "total_products": Product.objects.filter(seller=seller).count(),
            "total_orders": items.count(),
            "pending_orders": items.filter(status=FulfillmentStatus.PENDING).count(),
            "total_revenue": items.aggregate(s=Sum("total_price"))["s"] or Decimal("0.00"),
        }

    # --- Order management ---

    @staticmethod
    def list_order_items(seller: Seller, status: str | None = None, search: str | None = None):
        qs = (
            OrderItem.objects
            .filter(seller=seller)
            .select_related("order", "order__buyer", "product", "variant")
            .order_by("-order__created_at")
        )
        if status and status != "all":
            qs = qs.filter(status=status)
        if search:
            qs = qs.filter(
                Q(order__order_number__icontains=search)
                | Q(product__name__icontains=search)
                | Q(order__buyer__full_name__icontains=search)
            )
        return qs

    @staticmethod
    @transaction.atomic
    def update_order_item_status(seller: Seller, item_id, status: str, tracking_number: str | None = None) -> OrderItem:
        if status not in FulfillmentStatus.values:
            raise BusinessLogicException(f"Invalid status: {status}", code="invalid_status")

        try:
            item = OrderItem.objects.select_for_update().get(id=item_id, seller=seller)
        except (OrderItem.DoesNotExist, DjangoValidationError):
            raise NotFound("Order item not found.")

        item.status = status
        update_fields = ["status"]
        if tracking_number:
            item.tracking_number = tracking_number
            update_fields.append("tracking_number")
        item.save(update_fields=update_fields)

        logger.info(
            "Order item %s -> %s", item.id, status,
            extra={"order_id": item.order_id, "seller_id": seller.id},
        )
        return item

    # --- Admin ---

    @staticmethod
    def list_sellers(verification_status: str | None = None):
        qs = Seller.objects.select_related("user").order_by("-created_at")
        if verification_status:
            qs = qs.filter(verification_status=verification_status)
        return qs

    @staticmethod
    @transaction.atomic
    def set_verification(seller_id, verification_status: str) -> Seller:
        try:
            seller = Seller.objects.select_for_update().get(id=seller_id)
        except (Seller.DoesNotExist, DjangoValidationError):
            raise NotFound("Seller not found.")

        seller.verification_status = verification_status
        seller.save(update_fields=["verification_status"])
        logger.info("Seller %s marked %s", seller.id, verification_status, extra={"seller_id": seller.id})
        return seller

    @staticmethod
    def list_payouts(seller: Seller):
        return seller.payouts.all().order_by("-created_at")
