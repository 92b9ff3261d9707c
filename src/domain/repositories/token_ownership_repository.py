"""Abstract repository for the denormalized token ownership mirror."""

from abc import ABC, abstractmethod


class TokenOwnershipRepository(ABC):
    @abstractmethod
    async def set_owner_async(self, chain_id: str, collection_address: str, token_id: str, owner: str) -> None:
        """Record ``owner`` on the token document, merging with existing fields."""
        pass
