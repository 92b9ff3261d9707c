"""Domain layer tests for the OrderItem entity.

Tests the core domain logic including:
- Matching transfers against listings and offers
- Re-pointing offers at the new owner
- Status recomputation and liveness
- Rollback of in-memory state
"""

from unittest.mock import AsyncMock

import pytest

from domain.entities import OrderItem
from domain.enums import OrderStatus, OrderType
from domain.exceptions import IdentityResolutionError
from domain.models import ReconciliationPolicy
from integration.models import OrderItemDto
from integration.services import InMemoryIdentityResolver
from tests.fixtures.factories import HOUR_MS, NOW_MS, OrderItemFactory, TransferFactory, fixed_clock
from tests.fixtures.mixins import BaseTestCase


def create_item(record: OrderItemDto, usernames: dict[str, str] | None = None, owner_inherits_offers: bool = True, **kwargs) -> OrderItem:
    resolver = InMemoryIdentityResolver(usernames if usernames is not None else {"0xb": "bob", "0xd": "dave"})
    return OrderItem(record, resolver, ReconciliationPolicy(owner_inherits_offers=owner_inherits_offers), clock=fixed_clock, **kwargs)


class TestOrderItemCreation:
    """Test OrderItem initialization."""

    def test_listing_initial_owner_is_maker(self) -> None:
        """Test that a listing expects its maker to hold the token."""
        item: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))

        assert item.type == OrderType.LISTING
        assert item.initial_owner == "0xa"
        assert item.current_owner == "0xa"

    def test_offer_initial_owner_is_taker(self) -> None:
        """Test that an offer expects its taker to hold the token."""
        item: OrderItem = create_item(OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc"))

        assert item.type == OrderType.OFFER
        assert item.initial_owner == "0xc"
        assert item.current_owner == "0xc"


class TestTransferMatching:
    """Test which transfers affect an order item."""

    def test_listing_matches_when_maker_sends(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))

        assert item.transfer_matches(TransferFactory.create(from_address="0xa", to_address="0xb"))

    def test_listing_matches_when_maker_receives(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))

        assert item.transfer_matches(TransferFactory.create(from_address="0xb", to_address="0xa"))

    def test_listing_ignores_unrelated_addresses(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))

        assert not item.transfer_matches(TransferFactory.create(from_address="0xb", to_address="0xc"))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"chain_id": "137"},
            {"token_address": "0xother"},
            {"token_id": "43"},
        ],
    )
    def test_different_token_never_matches(self, overrides: dict[str, str]) -> None:
        """Test that token identity must match exactly."""
        listing: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))
        offer: OrderItem = create_item(OrderItemFactory.create_offer())
        transfer = TransferFactory.create(from_address="0xa", to_address="0xc", **overrides)

        assert not listing.transfer_matches(transfer)
        assert not offer.transfer_matches(transfer)

    def test_offer_always_matches_when_owner_inherits_offers(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_offer(taker_address="0xc"))

        assert item.transfer_matches(TransferFactory.create(from_address="0xa", to_address="0xd"))

    def test_offer_matches_only_taker_receiving_without_inheritance(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_offer(taker_address="0xc"), owner_inherits_offers=False)

        assert item.transfer_matches(TransferFactory.create(from_address="0xa", to_address="0xc"))
        assert not item.transfer_matches(TransferFactory.create(from_address="0xc", to_address="0xd"))


class TestApplyTransfer(BaseTestCase):
    """Test applying transfers to order items."""

    @pytest.mark.asyncio
    async def test_listing_deactivated_when_maker_sells(self) -> None:
        """Test that a listing becomes inactive once its maker no longer holds the token."""
        item: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))

        record: OrderItemDto = await item.apply_transfer(TransferFactory.create(from_address="0xa", to_address="0xb"))

        assert record is item.record
        assert item.current_owner == "0xb"
        self.assert_item_state(record, taker_address="", order_status=OrderStatus.VALID_INACTIVE)

    @pytest.mark.asyncio
    async def test_listing_reactivated_when_maker_gets_token_back(self) -> None:
        record: OrderItemDto = OrderItemFactory.create_listing(maker_address="0xa", order_status=OrderStatus.VALID_INACTIVE)
        item: OrderItem = create_item(record)

        await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xa"))

        assert item.current_owner == "0xa"
        assert item.order_status == OrderStatus.VALID_ACTIVE

    @pytest.mark.asyncio
    async def test_non_matching_transfer_is_a_no_op(self) -> None:
        record: OrderItemDto = OrderItemFactory.create_listing(maker_address="0xa")
        item: OrderItem = create_item(record)

        result: OrderItemDto = await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xc"))

        assert result is record
        assert item.current_owner == "0xa"
        assert item.order_status == OrderStatus.VALID_ACTIVE

    @pytest.mark.asyncio
    async def test_offer_taker_follows_new_owner(self) -> None:
        """Test that an offer is re-pointed at the new holder with a fresh username."""
        item: OrderItem = create_item(OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc", taker_username="carol"))

        record: OrderItemDto = await item.apply_transfer(TransferFactory.create(from_address="0xa", to_address="0xd"))

        assert item.current_owner == "0xd"
        assert record.taker_username == "dave"
        self.assert_item_state(record, taker_address="0xd", order_status=OrderStatus.VALID_ACTIVE)

    @pytest.mark.asyncio
    async def test_offer_inactive_when_maker_receives_token(self) -> None:
        """Test that an offer whose maker now holds the token is inactive."""
        item: OrderItem = create_item(OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc"))

        record: OrderItemDto = await item.apply_transfer(TransferFactory.create(from_address="0xc", to_address="0xm"))

        self.assert_item_state(record, taker_address="0xm", order_status=OrderStatus.VALID_INACTIVE)

    @pytest.mark.asyncio
    async def test_unknown_username_is_stored_empty(self) -> None:
        item: OrderItem = create_item(OrderItemFactory.create_offer(taker_address="0xc", taker_username="carol"), usernames={})

        record: OrderItemDto = await item.apply_transfer(TransferFactory.create(from_address="0xc", to_address="0xz"))

        assert record.taker_address == "0xz"
        assert record.taker_username == ""

    @pytest.mark.asyncio
    async def test_offer_taker_kept_without_inheritance(self) -> None:
        """Test that the taker is only compared, not reassigned, when offers are not inherited."""
        record: OrderItemDto = OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc", order_status=OrderStatus.VALID_INACTIVE)
        item: OrderItem = create_item(record, owner_inherits_offers=False)

        await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xc"))

        self.assert_item_state(record, taker_address="0xc", order_status=OrderStatus.VALID_ACTIVE)

    @pytest.mark.asyncio
    async def test_expired_item_becomes_invalid(self) -> None:
        """Test that an item past its end time is invalid and skips the quantity lookup."""
        quantity_lookup: AsyncMock = self.create_async_mock(return_value=1)
        record: OrderItemDto = OrderItemFactory.create_listing(maker_address="0xa", end_time_ms=NOW_MS - 1)
        item: OrderItem = create_item(record, quantity_lookup=quantity_lookup)

        await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xa"))

        assert item.order_status == OrderStatus.INVALID
        quantity_lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_yet_started_item_is_invalid(self) -> None:
        record: OrderItemDto = OrderItemFactory.create_listing(maker_address="0xa", start_time_ms=NOW_MS + HOUR_MS, end_time_ms=NOW_MS + 2 * HOUR_MS)
        item: OrderItem = create_item(record)

        await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xa"))

        assert item.order_status == OrderStatus.INVALID

    @pytest.mark.asyncio
    async def test_quantity_lookup_drives_multi_unit_orders(self) -> None:
        """Test that an owner holding fewer units than required is inactive."""
        quantity_lookup: AsyncMock = self.create_async_mock(return_value=2)
        record: OrderItemDto = OrderItemFactory.create_listing(maker_address="0xa", num_tokens=3)
        item: OrderItem = create_item(record, quantity_lookup=quantity_lookup)

        await item.apply_transfer(TransferFactory.create(from_address="0xb", to_address="0xa"))

        assert item.order_status == OrderStatus.VALID_INACTIVE
        quantity_lookup.assert_awaited_once_with(record.chain_id, record.collection_address, record.token_id, "0xa")

    @pytest.mark.asyncio
    async def test_applying_twice_converges(self) -> None:
        """Test that re-applying a transfer gives the same result."""
        listing: OrderItem = create_item(OrderItemFactory.create_listing(maker_address="0xa"))
        offer: OrderItem = create_item(OrderItemFactory.create_offer(taker_address="0xc"))
        transfer = TransferFactory.create(from_address="0xa", to_address="0xb")

        for item in (listing, offer):
            await item.apply_transfer(transfer)
            first = (item.order_status, item.current_owner, item.taker)
            await item.apply_transfer(transfer)

            assert (item.order_status, item.current_owner, item.taker) == first


class TestIdentityResolutionFailure(BaseTestCase):
    """Test that a failed username lookup leaves the item untouched."""

    @pytest.mark.asyncio
    async def test_resolver_failure_raises_and_keeps_state(self) -> None:
        resolver = AsyncMock()
        resolver.resolve_username_async.side_effect = ConnectionError("users unavailable")
        record: OrderItemDto = OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc", taker_username="carol")
        item: OrderItem = OrderItem(record, resolver, ReconciliationPolicy(), clock=fixed_clock)

        with pytest.raises(IdentityResolutionError) as exc_info:
            await item.apply_transfer(TransferFactory.create(from_address="0xc", to_address="0xd"))

        assert exc_info.value.address == "0xd"
        assert isinstance(exc_info.value.cause, ConnectionError)
        assert item.current_owner == "0xc"
        self.assert_item_state(record, taker_address="0xc", order_status=OrderStatus.VALID_ACTIVE)
        assert record.taker_username == "carol"


class TestSnapshotRestore:
    """Test rolling back in-memory state."""

    @pytest.mark.asyncio
    async def test_restore_reverts_record_and_owner(self) -> None:
        record: OrderItemDto = OrderItemFactory.create_offer(maker_address="0xm", taker_address="0xc", taker_username="carol")
        item: OrderItem = create_item(record)
        snapshot = item.snapshot()

        await item.apply_transfer(TransferFactory.create(from_address="0xc", to_address="0xb"))
        item.restore(snapshot)

        assert item.record is record
        assert record.taker_address == "0xc"
        assert record.taker_username == "carol"
        assert record.order_status == OrderStatus.VALID_ACTIVE
        assert item.current_owner == "0xc"


class TestSaveOrderItem:
    """Test persisting order items."""

    @pytest.mark.asyncio
    async def test_save_async_updates_repository(self) -> None:
        repository = AsyncMock()
        item: OrderItem = create_item(OrderItemFactory.create_listing())

        await item.save_async(repository)

        repository.update_order_item_async.assert_awaited_once_with(item.record)
