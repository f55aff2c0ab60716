# apps/analytics/services.py
import logging
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from apps.catalog.models import Product
from apps.orders.models import Order, OrderItem
from apps.sellers.models import Seller, VerificationStatus
from apps.utils.utils import percentage_change

logger = logging.getLogger(__name__)

TIME_RANGE_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "all": None,
}
MONTHS_OF_HISTORY = 6
ZERO = Decimal("0.00")


def _month_start(moment, months_back: int = 0):
    """
    First instant of the calendar month `months_back` months before `moment`.
    """
    month_index = moment.year * 12 + (moment.month - 1) - months_back
    year, month = divmod(month_index, 12)
    return moment.replace(year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def _revenue_and_count(items) -> tuple[Decimal, int]:
    agg = items.aggregate(revenue=Sum("total_price"), orders=Count("id"))
    return agg["revenue"] or ZERO, agg["orders"]


def monthly_revenue(seller: Seller, now=None) -> list[dict]:
    """
    Revenue per calendar month for the last six months, oldest first.
    """
    now = now or timezone.now()
    months = []
    for months_back in range(MONTHS_OF_HISTORY - 1, -1, -1):
        start = _month_start(now, months_back)
        end = _month_start(now, months_back - 1)
        revenue = (
            OrderItem.objects
            .filter(seller=seller, order__created_at__gte=start, order__created_at__lt=end)
            .aggregate(s=Sum("total_price"))["s"]
            or ZERO
        )
        months.append({"month": start.strftime("%b"), "revenue": revenue})
    return months


def seller_analytics(seller: Seller, time_range: str = "30d", now=None) -> dict:
    if time_range not in TIME_RANGE_DAYS:
        raise ValueError(f"Unknown time range: {time_range}")

    now = now or timezone.now()
    days = TIME_RANGE_DAYS[time_range]

    items = OrderItem.objects.filter(seller=seller)
    if days is None:
        current = items
    else:
        start = now - timedelta(days=days)
        current = items.filter(order__created_at__gte=start)

    total_revenue, total_orders = _revenue_and_count(current)

    # previous window of equal length right before the current one
    if days is None:
        prev_revenue, prev_orders = ZERO, 0
    else:
        prev_start = start - timedelta(days=days)
        prev_revenue, prev_orders = _revenue_and_count(
            items.filter(order__created_at__gte=prev_start, order__created_at__lt=start)
        )

    top_products = list(
        current
        .values("product_id", "product__name")
        .annotate(sales=Sum("quantity"), revenue=Sum("total_price"))
        .order_by("-revenue")[:5]
    )

    recent_orders = [
        {
            "id": str(item.id),
            "order_number": item.order.order_number,
            "product_name": item.product.name,
            "quantity": item.quantity,
            "total_price": item.total_price,
            "status": item.status,
            "created_at": item.order.created_at,
        }
        for item in current.select_related("order", "product").order_by("-order__created_at")[:10]
    ]

    products = Product.objects.filter(seller=seller).aggregate(
        total=Count("id"), views=Sum("view_count")
    )

    return {
        "time_range": time_range,
        "total_revenue": total_revenue,
        "total_orders": total_orders,
        "total_products": products["total"],
        "total_views": products["views"] or 0,
        "revenue_change": percentage_change(total_revenue, prev_revenue),
        "orders_change": percentage_change(total_orders, prev_orders),
        "recent_orders": recent_orders,
        "top_products": [
            {
                "product_id": str(row["product_id"]),
                "name": row["product__name"],
                "sales": row["sales"],
                "revenue": row["revenue"],
            }
            for row in top_products
        ],
        "monthly_revenue": monthly_revenue(seller, now=now),
    }


def admin_stats() -> dict:
    User = get_user_model()
    return {
        "total_users": User.objects.count(),
        "total_sellers": Seller.objects.count(),
        "pending_verifications": Seller.objects.filter(
            verification_status=VerificationStatus.PENDING
        ).count(),
        "total_products": Product.objects.count(),
        "total_orders": Order.objects.count(),
        "total_revenue": Order.objects.aggregate(s=Sum("total_amount"))["s"] or ZERO,
    }


@transaction.atomic
def refresh_seller_totals() -> int:
    """
    Recomputes Seller.total_sales and Product.sales_count from order items.
    Returns the number of sellers updated.
    """
    seller_totals = dict(
        OrderItem.objects.values_list("seller_id").annotate(total=Sum("total_price"))
    )
    product_units = dict(
        OrderItem.objects.values_list("product_id").annotate(units=Sum("quantity"))
    )

    updated = 0
    for seller in Seller.objects.select_for_update():
        total = seller_totals.get(seller.id) or ZERO
        if seller.total_sales != total:
            seller.total_sales = total
            seller.save(update_fields=["total_sales"])
            updated += 1

    for product in Product.objects.filter(id__in=product_units.keys()):
        units = product_units[product.id] or 0
        if product.sales_count != units:
            product.sales_count = units
            product.save(update_fields=["sales_count"])

    logger.info("Refreshed seller totals (%d sellers changed)", updated)
    return updated
