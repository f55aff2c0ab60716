"""
Orders app models, split per concern:

    from apps.orders.models import Order, OrderItem, CartItem, Dispute
"""

from .order import Order, OrderStatus, PaymentStatus
from .item import OrderItem, FulfillmentStatus
from .cart import CartItem
from .dispute import Dispute, DisputeStatus

__all__ = [
    "CartItem",
    "Dispute",
    "DisputeStatus",
    "FulfillmentStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
]
