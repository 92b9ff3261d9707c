"""Abstract repository for orders and their order items."""

from abc import ABC, abstractmethod
from typing import List, Optional

from neuroglia.data.infrastructure.abstractions import Repository

from domain.models import OrderItemQuery
from integration.models import OrderDto, OrderItemDto


class OrderWriteBatch(ABC):
    """Atomic unit of writes: either every staged write lands or none does.

    Writes only update existing records; committing a write to a record that
    no longer exists fails the whole batch.
    """

    @abstractmethod
    def update_order_item(self, item: OrderItemDto) -> None:
        """Stage an update of an order item record."""
        pass

    @abstractmethod
    def update_order(self, order: OrderDto) -> None:
        """Stage an update of an order record."""
        pass

    @abstractmethod
    async def commit_async(self) -> None:
        """Apply all staged writes atomically.

        Raises:
            OrderNotFoundError: a staged order record no longer exists
            OrderItemNotFoundError: a staged order item record no longer exists
        """
        pass


class OrderRepository(Repository[OrderItemDto, str], ABC):
    """Abstract repository for the order book.

    The standard Repository operations address order items. Order items live
    in a single collection and point back to their order via ``order_id``, so
    one query can find items across every order.
    """

    @abstractmethod
    async def find_order_items_async(self, query: OrderItemQuery) -> List[OrderItemDto]:
        """Retrieve every order item matching the query, across all orders."""
        pass

    @abstractmethod
    async def get_order_async(self, order_id: str) -> Optional[OrderDto]:
        """Retrieve an order record, or None if it does not exist."""
        pass

    @abstractmethod
    async def get_order_items_async(self, order_id: str) -> List[OrderItemDto]:
        """Retrieve all items belonging to an order."""
        pass

    @abstractmethod
    async def update_order_item_async(self, item: OrderItemDto) -> None:
        """Overwrite an existing order item record.

        Raises:
            OrderItemNotFoundError: the record does not exist
        """
        pass

    @abstractmethod
    def batch(self) -> OrderWriteBatch:
        """Start a new atomic write batch."""
        pass
