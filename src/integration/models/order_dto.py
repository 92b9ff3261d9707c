from dataclasses import dataclass

from neuroglia.data.abstractions import Identifiable, queryable

from domain.enums import OrderStatus


@queryable
@dataclass
class OrderDto(Identifiable[str]):
    id: str
    chain_id: str
    is_sell_order: bool
    maker_address: str
    num_items: int = 1
    order_status: OrderStatus = OrderStatus.VALID_ACTIVE
