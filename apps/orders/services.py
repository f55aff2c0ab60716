import logging
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from apps.catalog.models import Product, ProductStatus, ProductVariant
from apps.customers.models import Address
from apps.payments.models import Transaction, TransactionStatus, TransactionType
from apps.utils.exceptions import BusinessLogicException
from apps.utils.utils import generate_order_number

from .models import CartItem, Dispute, DisputeStatus, Order, OrderItem, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def quantize(amount) -> Decimal:
    return Decimal(amount).quantize(CENT)


class CartService:
    """
    Server-side cart store. Totals are always recomputed from the rows.
    """

    @staticmethod
    def load(user):
        return (
            CartItem.objects
            .filter(user=user)
            .select_related("product", "product__seller", "variant")
            .prefetch_related("product__images")
            .order_by("-created_at")
        )

    @staticmethod
    def summary(items) -> dict:
        items = list(items)
        return {
            "item_count": sum(item.quantity for item in items),
            "total_amount": sum((item.price * item.quantity for item in items), Decimal("0.00")),
        }

    @staticmethod
    def get_item(user, item_id) -> CartItem:
        try:
            return CartItem.objects.get(id=item_id, user=user)
        except (CartItem.DoesNotExist, DjangoValidationError):
            raise NotFound("Cart item not found.")

    @staticmethod
    @transaction.atomic
    def add(user, product: Product, variant: ProductVariant | None = None, quantity: int = 1, price=None) -> CartItem:
        """
        Adds a line, or bumps the quantity of the existing line for the same
        product + variant (a missing variant only matches a missing variant).
        """
        if quantity < 1:
            raise BusinessLogicException("Quantity must be at least 1.", code="invalid_quantity")
        if product.status != ProductStatus.ACTIVE:
            raise BusinessLogicException("This product is not available.", code="product_unavailable")
        if variant is not None and variant.product_id != product.id:
            raise BusinessLogicException("Variant does not belong to this product.", code="invalid_variant")

        if price is None:
            price = variant.price if variant is not None else product.base_price

        lines = CartItem.objects.select_for_update().filter(user=user, product=product)
        if variant is None:
            lines = lines.filter(variant__isnull=True)
        else:
            lines = lines.filter(variant=variant)

        existing = lines.first()
        if existing:
            return CartService.update_quantity(existing, existing.quantity + quantity)

        return CartItem.objects.create(
            user=user,
            product=product,
            variant=variant,
            quantity=quantity,
            price=price,
        )

    @staticmethod
    def update_quantity(item: CartItem, quantity: int) -> CartItem | None:
        # zero or less drops the line
        if quantity <= 0:
            CartService.remove(item)
            return None
        item.quantity = quantity
        item.save(update_fields=["quantity"])
        return item

    @staticmethod
    def remove(item: CartItem) -> None:
        item.delete()

    @staticmethod
    def clear(user) -> None:
        CartItem.objects.filter(user=user).delete()


class CheckoutService:

    @staticmethod
    def checkout_summary(user) -> dict:
        cart = CartService.summary(CartService.load(user))
        subtotal = cart["total_amount"]
        tax = quantize(subtotal * settings.CHECKOUT_TAX_RATE)
        shipping = quantize(settings.CHECKOUT_SHIPPING_COST)
        return {
            "item_count": cart["item_count"],
            "subtotal": quantize(subtotal),
            "tax": tax,
            "shipping": shipping,
            "grand_total": quantize(subtotal) + tax + shipping,
            "currency": settings.DEFAULT_CURRENCY,
        }

    @staticmethod
    def place_order(user, address_id, payment_method: str = "card") -> Order:
        """
        Order placement, all-or-nothing:
        1. order number
        2. order row (address snapshot)
        3. one order item per cart line (commission at platform rate)
        4. pending payment transaction for the full total
        5. clear the cart
        """
        try:
            address = Address.objects.get(id=address_id, user=user)
        except (Address.DoesNotExist, DjangoValidationError):
            raise BusinessLogicException("Please select a valid shipping address.", code="invalid_address")

        try:
            with transaction.atomic():
                return CheckoutService._place_order(user, address, payment_method)
        except BusinessLogicException:
            raise
        except Exception:
            logger.error("Order placement failed for user %s", user.id, exc_info=True, extra={"user_id": user.id})
            raise BusinessLogicException("Failed to place order. Please try again.", code="checkout_failed")

    @staticmethod
    def _place_order(user, address: Address, payment_method: str) -> Order:
        cart_items = list(CartService.load(user).select_for_update(of=("self",)))
        if not cart_items:
            raise BusinessLogicException("Your cart is empty.", code="empty_cart")

        total_amount = quantize(CartService.summary(cart_items)["total_amount"])
        snapshot = address.as_snapshot()

        order = Order.objects.create(
            order_number=generate_order_number(),
            buyer=user,
            total_amount=total_amount,
            currency=settings.DEFAULT_CURRENCY,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            shipping_address=snapshot,
            billing_address=snapshot,
        )

        rate = settings.PLATFORM_COMMISSION_RATE
        order_items = []
        for item in cart_items:
            line_total = quantize(item.price * item.quantity)
            order_items.append(OrderItem(
                order=order,
                seller_id=item.product.seller_id,
                product_id=item.product_id,
                variant_id=item.variant_id,
                quantity=item.quantity,
                unit_price=item.price,
                total_price=line_total,
                commission_amount=quantize(line_total * rate),
            ))
        OrderItem.objects.bulk_create(order_items)

        Transaction.objects.create(
            order=order,
            transaction_type=TransactionType.PAYMENT,
            amount=total_amount,
            currency=order.currency,
            payment_method=payment_method,
            status=TransactionStatus.PENDING,
        )

        CartService.clear(user)

        logger.info(
            "Order %s placed: %d items, total %s",
            order.order_number, len(order_items), total_amount,
            extra={"order_id": order.id, "order_number": order.order_number, "user_id": user.id},
        )
        return order


class OrderService:

    @staticmethod
    def buyer_orders(user):
        return (
            Order.objects
            .filter(buyer=user)
            .prefetch_related("items__product", "items__variant", "items__seller")
            .order_by("-created_at")
        )

    @staticmethod
    def get_buyer_order(user, order_id) -> Order:
        try:
            return OrderService.buyer_orders(user).get(id=order_id)
        except (Order.DoesNotExist, DjangoValidationError):
            raise NotFound("Order not found.")


class DisputeService:

    @staticmethod
    @transaction.atomic
    def raise_dispute(user, order_id, dispute_type: str, description: str) -> Dispute:
        order = OrderService.get_buyer_order(user, order_id)
        if order.disputes.filter(status=DisputeStatus.OPEN).exists():
            raise BusinessLogicException("An open dispute already exists for this order.", code="dispute_exists")

        dispute = Dispute.objects.create(
            order=order,
            raised_by=user,
            dispute_type=dispute_type,
            description=description,
        )
        logger.info("Dispute %s raised on %s", dispute.id, order.order_number, extra={"order_id": order.id})
        return dispute

    @staticmethod
    def buyer_disputes(user):
        return Dispute.objects.filter(raised_by=user).select_related("order").order_by("-created_at")

    @staticmethod
    def all_disputes(status: str | None = None):
        qs = Dispute.objects.select_related("order", "raised_by").order_by("-created_at")
        if status:
            qs = qs.filter(status=status)
        return qs

    @staticmethod
    @transaction.atomic
    def resolve(dispute_id, status: str, resolution: str) -> Dispute:
        if status not in (DisputeStatus.RESOLVED, DisputeStatus.REJECTED):
            raise BusinessLogicException(f"Invalid dispute status: {status}", code="invalid_status")
        try:
            dispute = Dispute.objects.select_for_update().get(id=dispute_id)
        except (Dispute.DoesNotExist, DjangoValidationError):
            raise NotFound("Dispute not found.")

        if dispute.status != DisputeStatus.OPEN:
            raise BusinessLogicException("Dispute is already closed.", code="dispute_closed")

        dispute.status = status
        dispute.resolution = resolution
        dispute.resolved_at = timezone.now()
        dispute.save(update_fields=["status", "resolution", "resolved_at"])

        logger.info("Dispute %s %s", dispute.id, status, extra={"order_id": dispute.order_id})
        return dispute
