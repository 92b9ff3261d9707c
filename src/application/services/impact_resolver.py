"""Impact resolver.

Builds the queries that locate every order item a transfer may affect. The
queries are returned, not executed.
"""

from dataclasses import dataclass

from domain.models import OrderItemQuery, ReconciliationPolicy, Transfer


@dataclass(frozen=True)
class ImpactedOrderItemQueries:
    offers: OrderItemQuery
    listings: OrderItemQuery

    def all(self) -> list[OrderItemQuery]:
        return [self.offers, self.listings]


class ImpactResolver:
    """Translates a transfer into order item queries.

    Listings are impacted when their maker gains or loses the token. Offers
    are impacted when their taker is losing the token, or always when new
    owners inherit offers (every offer's taker has to be re-pointed).
    """

    def __init__(self, policy: ReconciliationPolicy | None = None):
        self._policy = policy or ReconciliationPolicy()

    def get_impacted_order_items_queries(self, transfer: Transfer) -> ImpactedOrderItemQueries:
        token_query = (
            OrderItemQuery()
            .where("chain_id", transfer.chain_id)
            .where("collection_address", transfer.token_address)
            .where("token_id", transfer.token_id)
        )

        offers = token_query.where("is_sell_order", False).named("offers")
        listings = token_query.where("is_sell_order", True).named("listings")

        impacted_listings = listings.where_in("maker_address", [transfer.to_address, transfer.from_address])

        impacted_offers = offers
        if not self._policy.owner_inherits_offers:
            impacted_offers = offers.where("taker_address", transfer.from_address)

        return ImpactedOrderItemQueries(offers=impacted_offers, listings=impacted_listings)
