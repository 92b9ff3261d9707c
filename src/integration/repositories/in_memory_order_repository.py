"""In-memory implementation of OrderRepository."""

import copy
from dataclasses import asdict
from typing import List, Optional

from domain.exceptions import OrderItemNotFoundError, OrderNotFoundError
from domain.models import OrderItemQuery
from domain.repositories import OrderRepository, OrderWriteBatch
from integration.models import OrderDto, OrderItemDto


class InMemoryOrderWriteBatch(OrderWriteBatch):
    """Stages writes and applies them together on commit."""

    def __init__(self, repository: "InMemoryOrderRepository") -> None:
        self._repository = repository
        self._order_items: dict[str, OrderItemDto] = {}
        self._orders: dict[str, OrderDto] = {}
        self._committed = False

    def update_order_item(self, item: OrderItemDto) -> None:
        self._order_items[item.id] = copy.deepcopy(item)

    def update_order(self, order: OrderDto) -> None:
        self._orders[order.id] = copy.deepcopy(order)

    async def commit_async(self) -> None:
        if self._committed:
            raise RuntimeError("Write batch has already been committed")
        self._committed = True

        # nothing is applied unless every target still exists
        for item_id in self._order_items:
            if item_id not in self._repository._order_items:
                raise OrderItemNotFoundError(item_id)
        for order_id in self._orders:
            if order_id not in self._repository._orders:
                raise OrderNotFoundError(order_id)

        self._repository._order_items.update(self._order_items)
        self._repository._orders.update(self._orders)
        self._repository.commit_count += 1


class InMemoryOrderRepository(OrderRepository):
    """In-memory implementation of OrderRepository for testing.

    Records are stored as copies so callers never share state with the store.
    """

    def __init__(self) -> None:
        super().__init__()
        self._orders: dict[str, OrderDto] = {}
        self._order_items: dict[str, OrderItemDto] = {}
        self.commit_count = 0

    async def add_order_async(self, order: OrderDto, items: List[OrderItemDto]) -> None:
        """Store an order together with its items."""
        self._orders[order.id] = copy.deepcopy(order)
        await self.add_order_items_async(items)

    async def add_order_items_async(self, items: List[OrderItemDto]) -> None:
        """Store order items without touching their orders."""
        for item in items:
            self._order_items[item.id] = copy.deepcopy(item)

    async def delete_order_async(self, order_id: str) -> bool:
        """Delete an order and its items."""
        if order_id not in self._orders:
            return False
        del self._orders[order_id]
        self._order_items = {item_id: item for item_id, item in self._order_items.items() if item.order_id != order_id}
        return True

    async def contains_async(self, id: str) -> bool:
        return id in self._order_items

    async def get_async(self, id: str) -> Optional[OrderItemDto]:
        item = self._order_items.get(id)
        return copy.deepcopy(item) if item else None

    async def _do_add_async(self, entity: OrderItemDto) -> OrderItemDto:
        await self.add_order_items_async([entity])
        return entity

    async def _do_update_async(self, entity: OrderItemDto) -> OrderItemDto:
        await self.update_order_item_async(entity)
        return entity

    async def _do_remove_async(self, id: str) -> None:
        self._order_items.pop(id, None)

    async def find_order_items_async(self, query: OrderItemQuery) -> List[OrderItemDto]:
        """Retrieve order items matching the query."""
        return [copy.deepcopy(item) for item in self._order_items.values() if query.matches(asdict(item))]

    async def get_order_async(self, order_id: str) -> Optional[OrderDto]:
        """Retrieve an order by ID."""
        order = self._orders.get(order_id)
        return copy.deepcopy(order) if order else None

    async def get_order_items_async(self, order_id: str) -> List[OrderItemDto]:
        """Retrieve the items of an order."""
        return [copy.deepcopy(item) for item in self._order_items.values() if item.order_id == order_id]

    async def update_order_item_async(self, item: OrderItemDto) -> None:
        """Update an existing order item."""
        if item.id not in self._order_items:
            raise OrderItemNotFoundError(item.id)
        self._order_items[item.id] = copy.deepcopy(item)

    def batch(self) -> InMemoryOrderWriteBatch:
        return InMemoryOrderWriteBatch(self)
