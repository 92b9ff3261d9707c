"""Standard transfer handlers.

- update_orders: re-evaluates impacted orders (failures are surfaced)
- update_ownership: mirrors the new owner onto the token (best effort)
"""

import logging

from application.events.transfer_dispatcher import TransferHandlerFn
from application.services import OrderReconciler
from domain.models import Transfer
from domain.repositories import TokenOwnershipRepository

log = logging.getLogger(__name__)


def create_update_orders_handler(order_reconciler: OrderReconciler) -> TransferHandlerFn:
    async def update_orders(transfer: Transfer) -> None:
        await order_reconciler.reconcile_async(transfer)

    return TransferHandlerFn(fn=update_orders, name="update_orders", throw_error_on_failure=True)


def create_update_ownership_handler(ownership_repository: TokenOwnershipRepository) -> TransferHandlerFn:
    async def update_ownership(transfer: Transfer) -> None:
        standardized_transfer = transfer.standardized()
        try:
            await ownership_repository.set_owner_async(
                standardized_transfer.chain_id,
                standardized_transfer.token_address,
                standardized_transfer.token_id,
                standardized_transfer.to_address,
            )
        except Exception:
            log.error(f"Failed to update ownership of {standardized_transfer.token_key} to {standardized_transfer.to_address}")
            raise
        log.info(f"Updated ownership of {standardized_transfer.token_key} to {standardized_transfer.to_address}")

    return TransferHandlerFn(fn=update_ownership, name="update_ownership", throw_error_on_failure=False)
