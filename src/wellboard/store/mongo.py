"""MongoDB log store (motor).

Each category lives in the collection the logging forms write to
(``entries``, ``sleepLogs``, ``exerciseLogs``).  Documents are scoped by
``appId`` and ``userId`` fields; both are passed in explicitly.
"""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from wellboard.config import Settings
from wellboard.errors import StoreUnavailable
from wellboard.records import Category
from wellboard.store.base import LogStore, RawDocument

logger = logging.getLogger(__name__)


class MongoLogStore(LogStore):
    """Read raw log documents from MongoDB."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        app_id: str,
        client: AsyncIOMotorClient | None = None,
    ):
        """
        Initialize MongoLogStore.

        Args:
            db: MongoDB database connection
            app_id: Application namespace the documents were written under
            client: Owning client, closed by :meth:`close` if given
        """
        self._db = db
        self._app_id = app_id
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoLogStore":
        """Open a client from settings.  The store owns and closes it."""
        masked_uri = settings.MONGODB_URI.split("@")[-1]
        logger.info(f"Connecting to MongoDB: {masked_uri}")
        client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.STORE_TIMEOUT_MS,
        )
        return cls(client[settings.MONGODB_DATABASE], settings.APP_ID, client=client)

    async def fetch(self, category: Category, user_id: str, limit: int) -> list[RawDocument]:
        category = Category(category)
        collection = self._db[category.collection]
        try:
            cursor = collection.find({"appId": self._app_id, "userId": user_id})
            cursor = cursor.sort(category.order_field, -1)
            cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"MongoDB read failed for {category.value}: {e}")
            raise StoreUnavailable(category.value, user_id, str(e)) from e

        logger.debug(f"Fetched {len(docs)} {category.value} document(s) for {user_id}")
        return docs

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
