"""Order item validity rules.

Pure functions: given the same inputs they always return the same status and
never raise.
"""

from domain.enums import OrderStatus, OrderType


def is_order_expired(end_time_ms: int, now_ms: int) -> bool:
    """An order is expired once its end time has been reached."""
    return end_time_ms <= now_ms


def is_order_live(start_time_ms: int, end_time_ms: int, now_ms: int, is_expired: bool) -> bool:
    """An order is live if the current time is between the start and end time."""
    return start_time_ms <= now_ms <= end_time_ms and not is_expired


def compute_order_status(
    order_type: OrderType,
    is_live: bool,
    current_owner: str,
    maker_address: str,
    taker_address: str,
    owned_quantity: int,
    num_tokens_required: int,
) -> OrderStatus:
    """Derive the status of one order item.

    - not live: INVALID
    - listing: VALID_ACTIVE when the maker still holds enough tokens
    - offer: VALID_ACTIVE when the taker holds enough tokens and is not the maker
    """
    if not is_live:
        return OrderStatus.INVALID

    owns_enough = owned_quantity >= num_tokens_required
    if order_type == OrderType.OFFER:
        taker_is_current_owner = taker_address == current_owner
        maker_is_taker = maker_address == taker_address
        is_valid_active = taker_is_current_owner and owns_enough and not maker_is_taker
    else:
        maker_is_current_owner = maker_address == current_owner
        is_valid_active = maker_is_current_owner and owns_enough

    return OrderStatus.VALID_ACTIVE if is_valid_active else OrderStatus.VALID_INACTIVE


def aggregate_order_status(item_statuses: list[OrderStatus]) -> OrderStatus:
    """Combine item statuses into the status of the order owning them."""
    if not item_statuses or OrderStatus.INVALID in item_statuses:
        return OrderStatus.INVALID
    if all(status == OrderStatus.VALID_ACTIVE for status in item_statuses):
        return OrderStatus.VALID_ACTIVE
    return OrderStatus.VALID_INACTIVE
