"""Business metrics for the order reconciler.

Defines OpenTelemetry metrics for:
- Transfers: events received, dropped by filters, handler failures
- Orders: orders reconciled and order items rewritten
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

# =============================================================================
# TRANSFER METRICS
# =============================================================================

transfers_received = meter.create_counter(
    name="order_reconciler.transfers.received",
    description="Total transfer events received by the dispatcher",
    unit="1",
)

transfers_filtered = meter.create_counter(
    name="order_reconciler.transfers.filtered",
    description="Total transfer events dropped by an admission filter",
    unit="1",
)

transfer_handler_failures = meter.create_counter(
    name="order_reconciler.transfers.handler_failures",
    description="Total transfer handler failures",
    unit="1",
)

# =============================================================================
# ORDER METRICS
# =============================================================================

orders_reconciled = meter.create_counter(
    name="order_reconciler.orders.reconciled",
    description="Total orders updated after a transfer",
    unit="1",
)

order_items_updated = meter.create_counter(
    name="order_reconciler.order_items.updated",
    description="Total order items written after a transfer",
    unit="1",
)

reconciliation_time = meter.create_histogram(
    name="order_reconciler.reconciliation.processing_time",
    description="Time to reconcile the order book against one transfer",
    unit="ms",
)
