"""Ownership policy and owned-quantity lookup."""

from dataclasses import dataclass
from typing import Awaitable, Callable

# (chain_id, collection_address, token_id, owner) -> quantity held by owner
OwnedQuantityLookup = Callable[[str, str, str, str], Awaitable[int]]


async def single_unit_quantity(chain_id: str, collection_address: str, token_id: str, owner: str) -> int:
    """Owned quantity under the single-unit assumption.

    Every holder of an ERC-721 token owns exactly one unit. Multi-unit
    standards (ERC-1155) need a lookup backed by real balances.
    """
    return 1


@dataclass(frozen=True)
class ReconciliationPolicy:
    """Configuration-time rules for re-pointing orders after a transfer.

    owner_inherits_offers: when True, every offer on a token targets whoever
    currently holds it, so the offer's taker follows each transfer.
    """

    owner_inherits_offers: bool = True
