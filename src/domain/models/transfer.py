"""Transfer value object.

A normalized on-chain ownership change, as handed over by the ingestion
boundary (webhook).
"""

from dataclasses import dataclass, replace

from domain.enums import TransferEventType


def normalize_address(value: str) -> str:
    """Canonical form for addresses: trimmed and lower-cased."""
    return value.strip().lower()


@dataclass(frozen=True)
class Transfer:
    """A single token transfer event.

    Addresses are expected lower-cased and the chain id is a decimal string.
    Use ``Transfer.create`` when the inputs are not normalized yet.
    """

    chain_id: str
    token_address: str
    token_id: str
    from_address: str
    to_address: str
    block_number: int
    timestamp_ms: int
    kind: TransferEventType = TransferEventType.APPLY
    tx_hash: str = ""

    @classmethod
    def create(
        cls,
        chain_id: str,
        token_address: str,
        token_id: str,
        from_address: str,
        to_address: str,
        block_number: int,
        timestamp_ms: int,
        kind: TransferEventType = TransferEventType.APPLY,
        tx_hash: str = "",
    ) -> "Transfer":
        """Build a transfer, normalizing addresses and identifiers."""
        return cls(
            chain_id=str(chain_id).strip(),
            token_address=normalize_address(token_address),
            token_id=str(token_id).strip(),
            from_address=normalize_address(from_address),
            to_address=normalize_address(to_address),
            block_number=int(block_number),
            timestamp_ms=int(timestamp_ms),
            kind=kind,
            tx_hash=tx_hash,
        )

    @property
    def is_revert(self) -> bool:
        return self.kind == TransferEventType.REVERT

    @property
    def token_key(self) -> str:
        """Stable identifier of the transferred token."""
        return f"{self.chain_id}:{self.token_address}:{self.token_id}"

    def standardized(self) -> "Transfer":
        """Return this event expressed as an APPLY transfer.

        A revert is treated as a transfer from the ``to`` address back to the
        ``from`` address.
        """
        if not self.is_revert:
            return self
        return replace(
            self,
            kind=TransferEventType.APPLY,
            from_address=self.to_address,
            to_address=self.from_address,
        )

    def __str__(self) -> str:
        return f"{self.kind.value} {self.token_key} {self.from_address} -> {self.to_address} (block {self.block_number})"
