"""In-memory implementation of TokenOwnershipRepository."""

from typing import Any

from domain.repositories import TokenOwnershipRepository


class InMemoryTokenOwnershipRepository(TokenOwnershipRepository):
    """In-memory implementation of TokenOwnershipRepository for testing."""

    def __init__(self) -> None:
        self._tokens: dict[str, dict[str, Any]] = {}

    async def set_owner_async(self, chain_id: str, collection_address: str, token_id: str, owner: str) -> None:
        self._tokens.setdefault(f"{chain_id}:{collection_address}:{token_id}", {})["owner"] = owner

    def get_token(self, chain_id: str, collection_address: str, token_id: str) -> dict[str, Any] | None:
        return self._tokens.get(f"{chain_id}:{collection_address}:{token_id}")
