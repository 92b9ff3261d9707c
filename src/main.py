"""Main entry point: wires the reconciler into a transfer emitter.

The ingestion boundary (webhook) emits normalized transfers on the returned
emitter, either one at a time with ``emit`` or as a stream with ``consume``.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient
from neuroglia.serialization.json import JsonSerializer

from application.events import TransferEmitter, TransferFilter, create_update_orders_handler, create_update_ownership_handler, register_transfer_handler, skip_self_transfers, supported_chain_filter
from application.services import ImpactResolver, OrderReconciler
from application.settings import Settings, app_settings, configure_logging
from domain.entities import OrderItem
from domain.models import ReconciliationPolicy
from integration.models import OrderItemDto
from integration.repositories import MotorOrderRepository, MotorTokenOwnershipRepository
from integration.services import MotorIdentityResolver

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def create_transfer_filters(settings: Settings) -> list[TransferFilter]:
    filters: list[TransferFilter] = [supported_chain_filter(settings.supported_chain_ids)]
    if settings.skip_self_transfers:
        filters.append(skip_self_transfers)
    return filters


def create_transfer_emitter(settings: Settings = app_settings, client: AsyncIOMotorClient | None = None) -> TransferEmitter:
    """Create a transfer emitter with the standard handlers and filters.

    Args:
        settings: Application settings
        client: Motor client to reuse; one is created from the settings otherwise

    Returns:
        Emitter ready to receive transfers
    """
    log.debug("🚀 Creating transfer emitter...")

    client = client or AsyncIOMotorClient(settings.connection_strings["mongo"])
    policy = ReconciliationPolicy(owner_inherits_offers=settings.owner_inherits_offers)

    order_repository = MotorOrderRepository(
        client,
        settings.database_name,
        JsonSerializer(),
        orders_collection=settings.orders_collection,
        order_items_collection=settings.order_items_collection,
    )
    ownership_repository = MotorTokenOwnershipRepository(client, settings.database_name, nfts_collection=settings.nfts_collection)
    identity_resolver = MotorIdentityResolver(client, settings.database_name, users_collection=settings.users_collection)

    def create_order_item(record: OrderItemDto) -> OrderItem:
        return OrderItem(record, identity_resolver, policy)

    order_reconciler = OrderReconciler(order_repository, ImpactResolver(policy), create_order_item)

    transfer_emitter = TransferEmitter()
    register_transfer_handler(
        transfer_emitter,
        [
            create_update_orders_handler(order_reconciler),
            create_update_ownership_handler(ownership_repository),
        ],
        create_transfer_filters(settings),
    )

    log.info(f"✅ {settings.app_name} ready (owner_inherits_offers={policy.owner_inherits_offers})")
    return transfer_emitter
