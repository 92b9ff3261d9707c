"""Application services package.

Contains the services that turn a transfer into order book updates.
"""

from .impact_resolver import ImpactedOrderItemQueries, ImpactResolver
from .order_reconciler import OrderReconciler, ReconciliationResult

__all__ = [
    "ImpactResolver",
    "ImpactedOrderItemQueries",
    "OrderReconciler",
    "ReconciliationResult",
]
