"""Domain entities package.

Contains the Order aggregate and its OrderItem entities.
"""

from .order import Order, OrderItemFactory
from .order_item import OrderItem, OrderItemSnapshot, current_time_ms

__all__ = [
    "Order",
    "OrderItemFactory",
    "OrderItem",
    "OrderItemSnapshot",
    "current_time_ms",
]
