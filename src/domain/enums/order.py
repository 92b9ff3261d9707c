"""Order-book enumerations.

These enums are shared by the OrderItem/Order entities and the stored records.
Values match what is persisted in MongoDB.
"""

from enum import Enum


class OrderType(str, Enum):
    """Which side of the book an order item sits on."""

    LISTING = "listing"
    OFFER = "offer"


class OrderStatus(str, Enum):
    """Validity status of an order or order item."""

    INVALID = "invalid"
    VALID_ACTIVE = "validActive"
    VALID_INACTIVE = "validInactive"
