"""MongoDB repository implementation for the token ownership mirror."""

from motor.motor_asyncio import AsyncIOMotorClient

from domain.repositories import TokenOwnershipRepository


class MotorTokenOwnershipRepository(TokenOwnershipRepository):
    """Keeps ``owner`` up to date on the denormalized token documents."""

    def __init__(self, client: AsyncIOMotorClient, database_name: str, nfts_collection: str = "nfts"):
        self._collection = client[database_name][nfts_collection]

    async def set_owner_async(self, chain_id: str, collection_address: str, token_id: str, owner: str) -> None:
        await self._collection.update_one(
            {"_id": f"{chain_id}:{collection_address}:{token_id}"},
            {
                "$set": {
                    "chain_id": chain_id,
                    "collection_address": collection_address,
                    "token_id": token_id,
                    "owner": owner,
                }
            },
            upsert=True,
        )
