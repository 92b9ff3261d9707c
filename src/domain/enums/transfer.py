"""Transfer event enumerations."""

from enum import Enum


class TransferEventType(str, Enum):
    """Direction of an ownership change reported by the indexer.

    A revert undoes a previously applied transfer (chain reorganisation).
    """

    APPLY = "transfer"
    REVERT = "revertTransfer"
