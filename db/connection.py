import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.monitoring import (
    ServerHeartbeatFailedEvent,
    ServerHeartbeatListener,
    ServerHeartbeatStartedEvent,
    ServerHeartbeatSucceededEvent,
)

from core.config import Settings

logger = logging.getLogger("MongoDatabase")

USERS_COLLECTION = "users"


class ConnectionStateListener(ServerHeartbeatListener):
    """Keeps ``MongoDatabase.is_connected`` in step with server heartbeats."""

    def __init__(self, database: "MongoDatabase") -> None:
        self.database = database

    def started(self, event: ServerHeartbeatStartedEvent) -> None:
        pass

    def succeeded(self, event: ServerHeartbeatSucceededEvent) -> None:
        if self.database.client is not None and not self.database.is_connected:
            logger.info(f"MongoDB reconnected ({event.connection_id[0]}:{event.connection_id[1]})")
            self.database.is_connected = True

    def failed(self, event: ServerHeartbeatFailedEvent) -> None:
        if self.database.is_connected:
            logger.warning(f"MongoDB disconnected: {event.reply}")
            self.database.is_connected = False


class MongoDatabase:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        self.is_connected = False

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(
            self.settings.mongo_uri,
            serverSelectionTimeoutMS=self.settings.mongo_server_selection_timeout_ms,
            socketTimeoutMS=self.settings.mongo_socket_timeout_ms,
            event_listeners=[ConnectionStateListener(self)],
        )
        self.db = self.client[self.settings.mongo_db_name]
        try:
            await self.client.admin.command("ping")
        except Exception as e:
            logger.error(f"Error connecting to MongoDB: {e}")
            self.close()
            raise
        self.is_connected = True
        logger.info(f"Connected to MongoDB database '{self.settings.mongo_db_name}'")
        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        users = self.db[USERS_COLLECTION]
        await users.create_index("phone", unique=True)
        await users.create_index("role")
        await users.create_index([("phone", ASCENDING), ("role", ASCENDING)])
        await users.create_index([("balance", ASCENDING), ("status", ASCENDING)])

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None
        self.is_connected = False


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.database.db


def require_database(request: Request) -> None:
    """Reject the request with 503 while MongoDB is unreachable."""
    if not request.app.state.database.is_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is unavailable. Please try again later.",
        )


def get_user_collection(db: AsyncIOMotorDatabase):
    return db[USERS_COLLECTION]
