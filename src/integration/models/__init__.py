"""Integration layer DTOs package.

Contains the stored records for orders and order items.
"""

from .order_dto import OrderDto
from .order_item_dto import OrderItemDto

__all__ = [
    "OrderDto",
    "OrderItemDto",
]
