"""OrderItem entity.

A single side of a single order for one token (a listing or an offer), wrapped
around its stored record. The entity decides whether a transfer affects it,
re-points ownership and recomputes its status.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable

from domain.enums import OrderStatus, OrderType
from domain.exceptions import IdentityResolutionError
from domain.models import OwnedQuantityLookup, ReconciliationPolicy, Transfer, compute_order_status, is_order_expired, is_order_live, single_unit_quantity
from domain.repositories import IdentityResolver, OrderRepository, OrderWriteBatch
from integration.models import OrderItemDto

log = logging.getLogger(__name__)


def current_time_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class OrderItemSnapshot:
    """Copy of an item's mutable state, used to roll back a failed update."""

    record: OrderItemDto
    current_owner: str


class OrderItem:
    """Order item state machine.

    ``initial_owner`` is the address the item expects to hold the token when
    it was loaded: the taker for an offer, the maker for a listing.
    ``current_owner`` follows every matching transfer.
    """

    def __init__(
        self,
        record: OrderItemDto,
        identity_resolver: IdentityResolver,
        policy: ReconciliationPolicy | None = None,
        quantity_lookup: OwnedQuantityLookup = single_unit_quantity,
        clock: Callable[[], int] = current_time_ms,
    ):
        self._record = record
        self._identity_resolver = identity_resolver
        self._policy = policy or ReconciliationPolicy()
        self._quantity_lookup = quantity_lookup
        self._clock = clock
        self._initial_owner = self._owner_from_order
        self._current_owner = self._initial_owner

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def order_id(self) -> str:
        return self._record.order_id

    @property
    def record(self) -> OrderItemDto:
        return self._record

    @property
    def order_status(self) -> OrderStatus:
        return self._record.order_status

    @property
    def type(self) -> OrderType:
        return OrderType.LISTING if self._record.is_sell_order else OrderType.OFFER

    @property
    def maker(self) -> str:
        return self._record.maker_address

    @property
    def taker(self) -> str:
        return self._record.taker_address

    @property
    def initial_owner(self) -> str:
        return self._initial_owner

    @property
    def current_owner(self) -> str:
        return self._current_owner

    def transfer_matches(self, transfer: Transfer) -> bool:
        """Check whether ``transfer`` can change this item's validity."""
        correct_token = (
            transfer.token_address == self._record.collection_address
            and transfer.token_id == self._record.token_id
            and transfer.chain_id == self._record.chain_id
        )
        if not correct_token:
            return False

        # a listing is impacted when its maker gains or loses the token
        if self.type == OrderType.LISTING:
            return transfer.to_address == self.maker or transfer.from_address == self.maker

        # an offer is impacted when the taker gains the token, or always
        # when the new owner inherits the offers on the token
        taker_is_gaining_tokens = transfer.to_address == self.taker
        return self._policy.owner_inherits_offers or taker_is_gaining_tokens

    async def apply_transfer(self, transfer: Transfer) -> OrderItemDto:
        """Apply ``transfer`` to this item in memory.

        Non-matching transfers leave the item untouched. The record is only
        mutated after every lookup succeeded.

        Raises:
            IdentityResolutionError: the new taker's username could not be resolved
        """
        if not self.transfer_matches(transfer):
            return self._record

        taker_address = self._record.taker_address
        taker_username = self._record.taker_username
        if self.type == OrderType.OFFER and self._policy.owner_inherits_offers:
            taker_address = transfer.to_address
            taker_username = await self._resolve_username(taker_address)

        current_owner = transfer.to_address
        order_status = await self._get_order_status(current_owner, taker_address)

        self._record.taker_address = taker_address
        self._record.taker_username = taker_username
        self._record.order_status = order_status
        self._current_owner = current_owner

        log.debug(f"Order item {self.id} ({self.type.value}) now owned by {current_owner}: {order_status.value}")
        return self._record

    async def save_async(self, repository: OrderRepository) -> None:
        await repository.update_order_item_async(self._record)

    def save_via_batch(self, batch: OrderWriteBatch) -> None:
        batch.update_order_item(self._record)

    def snapshot(self) -> OrderItemSnapshot:
        return OrderItemSnapshot(record=replace(self._record), current_owner=self._current_owner)

    def restore(self, snapshot: OrderItemSnapshot) -> None:
        for name, value in vars(snapshot.record).items():
            setattr(self._record, name, value)
        self._current_owner = snapshot.current_owner

    @property
    def _owner_from_order(self) -> str:
        if self.type == OrderType.OFFER:
            return self._record.taker_address
        return self._record.maker_address

    @property
    def _is_live(self) -> bool:
        now = self._clock()
        is_expired = is_order_expired(self._record.end_time_ms, now)
        return is_order_live(self._record.start_time_ms, self._record.end_time_ms, now, is_expired)

    async def _resolve_username(self, address: str) -> str:
        try:
            username = await self._identity_resolver.resolve_username_async(address)
        except Exception as e:
            raise IdentityResolutionError(address, e) from e
        return username or ""

    async def _get_order_status(self, current_owner: str, taker_address: str) -> OrderStatus:
        if not self._is_live:
            return OrderStatus.INVALID

        owned_quantity = await self._quantity_lookup(
            self._record.chain_id,
            self._record.collection_address,
            self._record.token_id,
            current_owner,
        )
        return compute_order_status(
            order_type=self.type,
            is_live=True,
            current_owner=current_owner,
            maker_address=self._record.maker_address,
            taker_address=taker_address,
            owned_quantity=owned_quantity,
            num_tokens_required=self._record.num_tokens,
        )
