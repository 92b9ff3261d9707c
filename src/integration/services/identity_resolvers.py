"""IdentityResolver implementations.

Usernames are stored on the user profile document keyed by wallet address.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from domain.models import normalize_address
from domain.repositories import IdentityResolver

logger = logging.getLogger(__name__)


class MotorIdentityResolver(IdentityResolver):
    """Reads usernames from the MongoDB ``users`` collection."""

    def __init__(self, client: AsyncIOMotorClient, database_name: str, users_collection: str = "users"):
        self._collection = client[database_name][users_collection]

    async def resolve_username_async(self, address: str) -> Optional[str]:
        doc = await self._collection.find_one({"_id": normalize_address(address)}, {"username": 1})
        if not doc:
            logger.debug(f"No user profile for {address}")
            return None
        return doc.get("username") or None


class InMemoryIdentityResolver(IdentityResolver):
    """Dictionary-backed resolver for tests and local runs."""

    def __init__(self, usernames: dict[str, str] | None = None) -> None:
        self._usernames = {normalize_address(address): name for address, name in (usernames or {}).items()}

    async def resolve_username_async(self, address: str) -> Optional[str]:
        return self._usernames.get(normalize_address(address))
