"""Domain value objects for the order reconciler.

These are immutable value objects and pure rules used by the entities and
application services.
"""

from .order_item_query import OrderItemQuery
from .order_status import aggregate_order_status, compute_order_status, is_order_expired, is_order_live
from .ownership import OwnedQuantityLookup, ReconciliationPolicy, single_unit_quantity
from .transfer import Transfer, normalize_address

__all__ = [
    "Transfer",
    "normalize_address",
    "OrderItemQuery",
    "compute_order_status",
    "aggregate_order_status",
    "is_order_expired",
    "is_order_live",
    "OwnedQuantityLookup",
    "ReconciliationPolicy",
    "single_unit_quantity",
]
