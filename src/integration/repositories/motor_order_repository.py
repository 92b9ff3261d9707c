"""MongoDB repository implementation for orders and order items."""

import json
import logging
from typing import Any, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession, AsyncIOMotorCollection
from neuroglia.data.infrastructure.mongo import MotorRepository
from neuroglia.serialization.json import JsonSerializer
from pymongo import UpdateOne

from domain.exceptions import OrderItemNotFoundError, OrderNotFoundError
from domain.models import OrderItemQuery
from domain.repositories import OrderRepository, OrderWriteBatch
from integration.models import OrderDto, OrderItemDto

logger = logging.getLogger(__name__)


class MotorOrderWriteBatch(OrderWriteBatch):
    """Write batch committed inside a MongoDB multi-document transaction.

    Transactions require a replica set or sharded cluster.
    """

    def __init__(self, client: AsyncIOMotorClient, serializer: JsonSerializer, orders: AsyncIOMotorCollection, order_items: AsyncIOMotorCollection):
        self._client = client
        self._serializer = serializer
        self._orders = orders
        self._order_items = order_items
        self._order_operations: dict[str, UpdateOne] = {}
        self._order_item_operations: dict[str, UpdateOne] = {}

    def update_order_item(self, item: OrderItemDto) -> None:
        self._order_item_operations[item.id] = UpdateOne({"id": item.id}, {"$set": self._to_document(item)})

    def update_order(self, order: OrderDto) -> None:
        self._order_operations[order.id] = UpdateOne({"id": order.id}, {"$set": self._to_document(order)})

    async def commit_async(self) -> None:
        if not self._order_operations and not self._order_item_operations:
            return

        async with await self._client.start_session() as session:
            async with session.start_transaction():
                # raising inside the transaction aborts it
                missing_item_ids = await self._write_async(self._order_items, self._order_item_operations, session)
                if missing_item_ids:
                    raise OrderItemNotFoundError(", ".join(missing_item_ids))
                missing_order_ids = await self._write_async(self._orders, self._order_operations, session)
                if missing_order_ids:
                    raise OrderNotFoundError(", ".join(missing_order_ids))

        logger.debug(f"Committed {len(self._order_operations)} order and {len(self._order_item_operations)} order item updates")

    def _to_document(self, entity: Any) -> dict[str, Any]:
        return json.loads(self._serializer.serialize_to_text(entity))

    @staticmethod
    async def _write_async(collection: AsyncIOMotorCollection, operations: dict[str, UpdateOne], session: AsyncIOMotorClientSession) -> list[str]:
        """Run ``operations`` and return the ids of the records that did not exist."""
        if not operations:
            return []

        result = await collection.bulk_write(list(operations.values()), ordered=True, session=session)
        if result.matched_count == len(operations):
            return []

        cursor = collection.find({"id": {"$in": list(operations)}}, {"id": 1}, session=session)
        existing_ids = set()
        async for doc in cursor:
            existing_ids.add(doc["id"])
        return [record_id for record_id in operations if record_id not in existing_ids]


class MotorOrderDtoRepository(MotorRepository[OrderDto, str]):
    """MongoDB-based repository for OrderDto records.

    Extends Neuroglia's MotorRepository to inherit standard CRUD operations.
    """

    async def find_by_id_async(self, order_id: str) -> Optional[OrderDto]:
        """Retrieve an order by its ID.

        Returns:
            OrderDto if found, None otherwise
        """
        doc = await self.collection.find_one({"id": order_id})
        if doc:
            return self._deserialize_entity(doc)

        return None


class MotorOrderRepository(MotorRepository[OrderItemDto, str], OrderRepository):
    """
    MongoDB-based repository for the order book.

    Extends Neuroglia's MotorRepository over the order items collection and
    implements OrderRepository for the reconciliation queries. Orders live in
    their own collection; each item carries the ``order_id`` of its parent so
    impacted items can be found across all orders with a single query.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        database_name: str,
        serializer: JsonSerializer,
        orders_collection: str = "orders",
        order_items_collection: str = "order_items",
    ):
        super().__init__(
            client=client,
            database_name=database_name,
            collection_name=order_items_collection,
            serializer=serializer,
            entity_type=OrderItemDto,
        )
        self._mongo_client = client
        self._json_serializer = serializer
        self._orders = MotorOrderDtoRepository(
            client=client,
            database_name=database_name,
            collection_name=orders_collection,
            serializer=serializer,
            entity_type=OrderDto,
        )

    async def find_order_items_async(self, query: OrderItemQuery) -> List[OrderItemDto]:
        """Retrieve order items matching the query, across all orders."""
        filter_dict = query.to_filter()
        cursor = self.collection.find(filter_dict)

        items = []
        async for doc in cursor:
            entity = self._deserialize_entity(doc)
            if entity:
                items.append(entity)

        logger.debug(f"Query {query.name or filter_dict} matched {len(items)} order items")
        return items

    async def get_order_async(self, order_id: str) -> Optional[OrderDto]:
        return await self._orders.find_by_id_async(order_id)

    async def get_order_items_async(self, order_id: str) -> List[OrderItemDto]:
        """Retrieve every item of an order."""
        cursor = self.collection.find({"order_id": order_id})

        items = []
        async for doc in cursor:
            entity = self._deserialize_entity(doc)
            if entity:
                items.append(entity)

        return items

    async def update_order_item_async(self, item: OrderItemDto) -> None:
        document = json.loads(self._json_serializer.serialize_to_text(item))
        result = await self.collection.update_one({"id": item.id}, {"$set": document})
        if result.matched_count == 0:
            raise OrderItemNotFoundError(item.id)

    def batch(self) -> MotorOrderWriteBatch:
        return MotorOrderWriteBatch(self._mongo_client, self._json_serializer, self._orders.collection, self.collection)
