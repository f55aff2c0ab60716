import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class CartItem(models.Model):
    """
    One cart line per (user, product, variant). The price is captured when
    the line is added and is what checkout charges.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="cart_items",
        on_delete=models.CASCADE,
    )
    product = models.ForeignKey(
        "catalog.Product",
        related_name="cart_items",
        on_delete=models.CASCADE,
    )
    variant = models.ForeignKey(
        "catalog.ProductVariant",
        related_name="cart_items",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
    )

    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "cart_items"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "product"], name="cart_item_user_product_idx"),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.product_id} x {self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
