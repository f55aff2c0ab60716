import uuid

from django.conf import settings
from django.db import models


class TransactionType(models.TextChoices):
    PAYMENT = "payment", "Payment"
    REFUND = "refund", "Refund"
    PAYOUT = "payout", "Payout"


class TransactionStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"


class Transaction(models.Model):
    """
    Money movement against an order. Checkout writes exactly one pending
    `payment` row per order; refunds/payouts are recorded by admins.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey("orders.Order", on_delete=models.PROTECT, related_name="transactions")

    transaction_type = models.CharField(max_length=20, choices=TransactionType.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)
    payment_method = models.CharField(max_length=30, default="card")
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING,
        db_index=True,
    )

    # Reference from the payment provider, once there is one
    gateway_reference = models.CharField(max_length=100, null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["order", "transaction_type"], name="txn_order_type_idx"),
        ]

    def __str__(self):
        return f"{self.transaction_type} {self.amount} {self.currency} [{self.status}]"
