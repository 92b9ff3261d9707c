from dataclasses import dataclass

from neuroglia.data.abstractions import Identifiable, queryable

from domain.enums import OrderStatus


@queryable
@dataclass
class OrderItemDto(Identifiable[str]):
    """Order item as persisted in the ``order_items`` collection.

    ``order_id`` references the owning order; ``id`` references the item.
    """

    id: str
    order_id: str
    chain_id: str
    collection_address: str
    token_id: str
    is_sell_order: bool
    maker_address: str
    taker_address: str = ""
    taker_username: str = ""
    num_tokens: int = 1
    start_time_ms: int = 0
    end_time_ms: int = 0
    order_status: OrderStatus = OrderStatus.VALID_ACTIVE
    collection_name: str = ""
    token_name: str = ""
