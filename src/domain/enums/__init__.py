"""Domain enumerations package.

This package contains all enumerations used across the domain layer,
organized into logical modules for maintainability.
"""

from .order import OrderStatus, OrderType
from .transfer import TransferEventType

__all__ = [
    # Order enums
    "OrderType",
    "OrderStatus",
    # Transfer enums
    "TransferEventType",
]
