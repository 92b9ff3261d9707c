"""Admission filters for transfer events.

A filter is an async predicate; returning False drops the transfer.
"""

from typing import Iterable

from application.events.transfer_dispatcher import TransferFilter
from domain.models import Transfer


def supported_chain_filter(chain_ids: Iterable[str]) -> TransferFilter:
    """Accept only transfers on the given chains (an empty set accepts all)."""
    supported = frozenset(chain_ids)

    async def is_supported_chain(transfer: Transfer) -> bool:
        return not supported or transfer.chain_id in supported

    return is_supported_chain


async def skip_self_transfers(transfer: Transfer) -> bool:
    """Drop transfers that do not change the owner."""
    return transfer.from_address != transfer.to_address
