"""
MongoDB integration.

``DataStore`` owns a single motor client for the lifetime of the
process.  It is constructed by ``create_app``, connected in the startup
hook and closed in the shutdown hook; services receive it through
FastAPI dependencies rather than importing a module-level handle.

Identifier handling lives here as well.  Services ask the store whether
a string is a valid reference token and convert tokens to the store's
native identifier type, so nothing outside this module depends on the
ObjectId format.
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from .config import Settings
from .errors import StoreConnectionError

LESSONS = "lessons"
ORDERS = "orders"

logger = logging.getLogger(__name__)


class DataStore:
    """Handle to the application's MongoDB database."""

    def __init__(self, settings: Settings) -> None:
        self.uri = settings.mongodb_uri
        self.db_name = settings.db_name
        self.timeout_ms = settings.mongo_timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db = None

    @property
    def connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        """Open the client and verify the server answers a ping.

        Raises ``StoreConnectionError`` if the URI is missing or the
        server cannot be reached.  There is no offline mode; callers
        are expected to abort startup.
        """
        if not self.uri:
            raise StoreConnectionError("MONGODB_URI is not configured")
        client = AsyncIOMotorClient(
            self.uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StoreConnectionError(f"Could not connect to MongoDB: {exc}") from exc
        self._client = client
        self._db = client[self.db_name]
        logger.info("Connected to MongoDB database '%s'", self.db_name)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("Database connection closed")
        self._client = None
        self._db = None

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Return the collection called ``name``.

        Raises ``RuntimeError`` when used before ``connect``.
        """
        if self._db is None:
            raise RuntimeError("Database not initialized. Call connect() first.")
        return self._db[name]

    @staticmethod
    def is_valid_reference(token: Any) -> bool:
        """Return True if ``token`` names a record id this store accepts."""
        if isinstance(token, ObjectId):
            return True
        return isinstance(token, str) and ObjectId.is_valid(token)

    @staticmethod
    def to_reference(token: Any) -> ObjectId:
        """Convert ``token`` to the store's native identifier.

        Raises ``ValueError`` for malformed tokens.
        """
        if isinstance(token, ObjectId):
            return token
        if not isinstance(token, str):
            raise ValueError(f"{token!r} is not a valid identifier")
        try:
            return ObjectId(token)
        except InvalidId as exc:
            raise ValueError(f"{token!r} is not a valid identifier") from exc
