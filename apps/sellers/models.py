import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class VerificationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    VERIFIED = "verified", "Verified"
    REJECTED = "rejected", "Rejected"


class Seller(models.Model):
    """
    Seller account attached to a user. verification_status is the KYC state.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="seller",
    )

    business_name = models.CharField(max_length=255)
    business_type = models.CharField(max_length=100, blank=True, default="")
    description = models.TextField(blank=True, default="")
    logo_url = models.URLField(blank=True, null=True)

    verification_status = models.CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.PENDING,
        db_index=True,
    )
    trust_score = models.DecimalField(max_digits=3, decimal_places=1, default=Decimal("5.0"))
    total_sales = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    # Seller's agreed rate; order commission currently uses PLATFORM_COMMISSION_RATE
    commission_rate = models.DecimalField(max_digits=5, decimal_places=4, default=Decimal("0.10"))
    status = models.CharField(max_length=20, default="active")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "sellers"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.business_name} [{self.verification_status}]"


class PayoutStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"


class SellerPayout(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(Seller, on_delete=models.CASCADE, related_name="payouts")

    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")
    status = models.CharField(max_length=20, choices=PayoutStatus.choices, default=PayoutStatus.PENDING)
    payout_date = models.DateTimeField(null=True, blank=True)
    reference = models.CharField(max_length=100, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "seller_payouts"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Payout {self.amount} {self.currency} -> {self.seller_id} ({self.status})"
