"""
Database connection manager for CareerHub.

Provides MongoDB connection management with both synchronous (PyMongo)
and asynchronous (Motor) client support.
"""

from contextlib import contextmanager
from typing import Any, Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from careerhub.data.models import (
    Certificate,
    Course,
    CourseApplication,
    JobApplication,
    JobPosting,
    Notification,
    Transcript,
    User,
)
from careerhub.utils.config import AppSettings, get_settings
from careerhub.utils.logger import get_logger

logger = get_logger(__name__)

INDEXED_MODELS = (
    User,
    Transcript,
    Certificate,
    JobPosting,
    Course,
    CourseApplication,
    JobApplication,
    Notification,
)


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Supports both synchronous and asynchronous operations. Clients are
    created lazily unless passed in, which lets callers share a client
    or substitute one in tests.
    """

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        sync_client: Optional[MongoClient] = None,
        async_client: Optional[AsyncIOMotorClient] = None,
    ) -> None:
        """Initialize database manager with settings."""
        self._settings = settings or get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._sync_client = sync_client
        self._async_client = async_client

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Security: URL-encodes credentials to prevent injection attacks.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    @property
    def transactions_enabled(self) -> bool:
        """Whether multi-document batches run inside a transaction."""
        return self._settings.database.use_transactions

    # -------------------------------------------------------------------------
    # Synchronous Client
    # -------------------------------------------------------------------------

    def get_sync_client(self) -> MongoClient:
        """Get or create synchronous MongoDB client."""
        if self._sync_client is None:
            logger.info("Creating synchronous MongoDB client")
            timeout = self._settings.database.timeout_ms
            self._sync_client = MongoClient(
                self._uri,
                serverSelectionTimeoutMS=timeout,
                connectTimeoutMS=timeout,
                maxPoolSize=50,
                minPoolSize=5,
            )
        return self._sync_client

    def get_sync_database(self) -> Database:
        """Get synchronous database instance."""
        return self.get_sync_client()[self._db_name]

    def get_sync_collection(self, collection_name: str) -> Any:
        """Get a synchronous collection by name."""
        return self.get_sync_database()[collection_name]

    @contextmanager
    def sync_session(self):
        """Context manager for synchronous database session."""
        client = self.get_sync_client()
        session = client.start_session()
        try:
            yield session
        finally:
            session.end_session()

    def check_sync_connection(self) -> bool:
        """Check if synchronous connection is healthy."""
        try:
            self.get_sync_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Sync connection check failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Asynchronous Client
    # -------------------------------------------------------------------------

    def get_async_client(self) -> AsyncIOMotorClient:
        """Get or create asynchronous MongoDB client."""
        if self._async_client is None:
            logger.info("Creating asynchronous MongoDB client")
            timeout = self._settings.database.timeout_ms
            self._async_client = AsyncIOMotorClient(
                self._uri,
                serverSelectionTimeoutMS=timeout,
                connectTimeoutMS=timeout,
                maxPoolSize=50,
                minPoolSize=5,
            )
        return self._async_client

    def get_async_database(self) -> AsyncIOMotorDatabase:
        """Get asynchronous database instance."""
        return self.get_async_client()[self._db_name]

    def get_async_collection(self, collection_name: str) -> Any:
        """Get an asynchronous collection by name."""
        return self.get_async_database()[collection_name]

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close_sync(self) -> None:
        """Close synchronous client connection."""
        if self._sync_client:
            logger.info("Closing synchronous MongoDB client")
            self._sync_client.close()
            self._sync_client = None

    def close_async(self) -> None:
        """Close asynchronous client connection."""
        if self._async_client:
            logger.info("Closing asynchronous MongoDB client")
            self._async_client.close()
            self._async_client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create the indexes each document model declares in its ``Settings``."""
        logger.info("Ensuring database indexes")

        for model in INDEXED_MODELS:
            collection = self.get_async_collection(model.Settings.name)
            for keys in model.Settings.indexes:
                await collection.create_index(keys)

        logger.info("Database indexes created successfully")


# Process-wide manager for the CLI composition root
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
