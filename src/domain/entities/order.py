"""Order aggregate.

An order owns one order item per token it trades (a bundle spans several
tokens). A transfer is applied to every item and the result is written as a
single atomic batch, so a half-updated order is never persisted.
"""

import logging
from dataclasses import replace
from typing import Callable

from domain.entities.order_item import OrderItem
from domain.enums import OrderStatus
from domain.exceptions import OrderNotFoundError
from domain.models import Transfer, aggregate_order_status
from domain.repositories import OrderRepository
from integration.models import OrderDto, OrderItemDto

log = logging.getLogger(__name__)

OrderItemFactory = Callable[[OrderItemDto], OrderItem]


class Order:
    def __init__(self, record: OrderDto, items: list[OrderItem]):
        self._record = record
        self._items = list(items)

    @classmethod
    async def load_async(cls, order_id: str, repository: OrderRepository, item_factory: OrderItemFactory) -> "Order":
        """Read the order and all of its items fresh from the repository.

        Raises:
            OrderNotFoundError: no order record exists for ``order_id``
        """
        record = await repository.get_order_async(order_id)
        if record is None:
            raise OrderNotFoundError(order_id)
        item_records = await repository.get_order_items_async(order_id)
        return cls(record, [item_factory(item_record) for item_record in item_records])

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def record(self) -> OrderDto:
        return self._record

    @property
    def items(self) -> list[OrderItem]:
        return list(self._items)

    @property
    def order_status(self) -> OrderStatus:
        return self._record.order_status

    async def handle_transfer(self, transfer: Transfer, repository: OrderRepository) -> list[OrderItemDto]:
        """Apply ``transfer`` to every item and persist the order atomically.

        If any step fails the in-memory state is rolled back, nothing is
        committed, and the error is re-raised.
        """
        item_snapshots = [item.snapshot() for item in self._items]
        order_snapshot = replace(self._record)
        try:
            results = []
            for item in self._items:
                results.append(await item.apply_transfer(transfer))

            self._record.order_status = aggregate_order_status([item.order_status for item in self._items])

            batch = repository.batch()
            for item in self._items:
                item.save_via_batch(batch)
            batch.update_order(self._record)
            await batch.commit_async()
        except Exception:
            for item, snapshot in zip(self._items, item_snapshots):
                item.restore(snapshot)
            self._record.order_status = order_snapshot.order_status
            log.warning(f"⚠️ Order {self.id} was not updated for transfer {transfer.token_key}")
            raise

        log.debug(f"Order {self.id} updated for transfer {transfer.token_key}: {self._record.order_status.value}")
        return results
