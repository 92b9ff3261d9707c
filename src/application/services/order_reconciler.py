"""Order reconciler.

Re-evaluates every order impacted by a transfer: locate impacted order items,
load their owning orders fresh, and apply the transfer to each order in turn.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

from application.services.impact_resolver import ImpactResolver
from domain.entities import Order, OrderItemFactory
from domain.models import Transfer
from domain.repositories import OrderRepository
from observability import order_items_updated, orders_reconciled, reconciliation_time

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    orders_found: int
    order_items_updated: int


class OrderReconciler:
    """Applies transfers to the order book.

    Orders are processed one after another; each order's update is atomic on
    its own.
    """

    def __init__(self, repository: OrderRepository, impact_resolver: ImpactResolver, item_factory: OrderItemFactory):
        self._repository = repository
        self._impact_resolver = impact_resolver
        self._item_factory = item_factory

    async def reconcile_async(self, transfer: Transfer) -> ReconciliationResult:
        """Update every order impacted by ``transfer``.

        Raises:
            OrderNotFoundError: an impacted item references a missing order
            IdentityResolutionError: a new taker's username could not be resolved
        """
        start_time = time.time()
        standardized_transfer = transfer.standardized()

        queries = self._impact_resolver.get_impacted_order_items_queries(standardized_transfer).all()
        query_results = await asyncio.gather(*(self._repository.find_order_items_async(query) for query in queries))

        order_ids: list[str] = []
        for items in query_results:
            for item in items:
                if item.order_id not in order_ids:
                    order_ids.append(item.order_id)

        orders = await asyncio.gather(*(Order.load_async(order_id, self._repository, self._item_factory) for order_id in order_ids))

        log.info(f"Found: {len(orders)} orders to update")

        items_updated = 0
        for order in orders:
            results = await order.handle_transfer(standardized_transfer, self._repository)
            items_updated += len(results)
            orders_reconciled.add(1)
            order_items_updated.add(len(results))

        processing_time_ms = (time.time() - start_time) * 1000
        reconciliation_time.record(processing_time_ms, {"chain_id": standardized_transfer.chain_id})
        return ReconciliationResult(orders_found=len(orders), order_items_updated=items_updated)
