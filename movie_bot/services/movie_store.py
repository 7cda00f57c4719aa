# movie_bot/services/movie_store.py

from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from ..config import logger
from ..errors import StoreUnavailable


class MovieStore:
    """
    Thin async wrapper around the MongoDB collection holding movie documents.

    Exposes only the two read operations the bot needs. Every driver error is
    re-raised as StoreUnavailable so callers never handle PyMongo types.
    """

    def __init__(
        self,
        url: str,
        database: str = "movies",
        collection: str = "movies",
        *,
        timeout_ms: int = 5000,
    ) -> None:
        self._url = url
        self._database_name = database
        self._collection_name = collection
        self._timeout_ms = timeout_ms
        self._client: AsyncMongoClient | None = None

    @property
    def collection(self) -> Any:
        if self._client is None:
            raise StoreUnavailable("Movie store is not connected.")
        return self._client[self._database_name][self._collection_name]

    async def connect(self) -> None:
        """
        Creates the client and pings the server. A failed ping is only logged:
        the bot keeps running and requests fail with StoreUnavailable until
        the server becomes reachable.
        """
        self._client = AsyncMongoClient(
            self._url, serverSelectionTimeoutMS=self._timeout_ms
        )
        try:
            await self._client.admin.command("ping")
            logger.info("[STORE] MongoDB connected.")
        except PyMongoError as e:
            logger.error(f"[STORE] MongoDB connection error: {e}")

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        logger.info("[STORE] MongoDB connection closed.")

    async def query(
        self, filter: dict[str, Any], limit: int | None = None
    ) -> list[dict[str, Any]]:
        """
        Returns the documents matching `filter`, optionally capped at `limit`.
        Not used by the bot itself; part of the store's read interface.
        """
        try:
            cursor = self.collection.find(filter)
            if limit is not None:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StoreUnavailable(str(e)) from e

    async def sample_one(self, filter: dict[str, Any]) -> dict[str, Any] | None:
        """
        Picks one matching document uniformly at random on the server side
        ($match then $sample), or returns None when nothing matches.
        """
        pipeline = [{"$match": filter}, {"$sample": {"size": 1}}]
        try:
            cursor = await self.collection.aggregate(pipeline)
            documents = await cursor.to_list(length=1)
        except PyMongoError as e:
            raise StoreUnavailable(str(e)) from e
        return documents[0] if documents else None
