"""Observability utilities and metrics."""

from .metrics import order_items_updated, orders_reconciled, reconciliation_time, transfer_handler_failures, transfers_filtered, transfers_received

__all__ = [
    # Transfer metrics
    "transfers_received",
    "transfers_filtered",
    "transfer_handler_failures",
    # Order metrics
    "orders_reconciled",
    "order_items_updated",
    "reconciliation_time",
]
