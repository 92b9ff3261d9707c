"""Transfer event handling package.

Contains the dispatch pipeline, the event source, the standard handlers and
the standard admission filters.
"""

from .transfer_dispatcher import DispatchResult, HandlerOutcome, TransferDispatcher, TransferDispatchError, TransferFilter, TransferHandlerFn
from .transfer_emitter import ConsumeSummary, TransferEmitter, TransferListener, register_transfer_handler
from .transfer_filters import skip_self_transfers, supported_chain_filter
from .transfer_handlers import create_update_orders_handler, create_update_ownership_handler

__all__ = [
    # Dispatch pipeline
    "TransferDispatcher",
    "TransferDispatchError",
    "TransferHandlerFn",
    "TransferFilter",
    "DispatchResult",
    "HandlerOutcome",
    # Event source
    "TransferEmitter",
    "TransferListener",
    "ConsumeSummary",
    "register_transfer_handler",
    # Standard handlers
    "create_update_orders_handler",
    "create_update_ownership_handler",
    # Standard filters
    "supported_chain_filter",
    "skip_self_transfers",
]
