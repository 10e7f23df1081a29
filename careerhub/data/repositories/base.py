"""
Base repository class providing common document store operations.

All entity-specific repositories inherit from this base class. Driver
failures surface as ``UnavailableError`` so callers only ever see the
CareerHub error taxonomy.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from careerhub.core.exceptions import InvalidArgumentError, UnavailableError
from careerhub.data.database import DatabaseManager
from careerhub.data.models.base import BaseDocument, utcnow
from careerhub.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate driver exceptions raised inside the block into UnavailableError."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"Store operation '{operation}' failed: {e}")
        raise UnavailableError(operation, e) from e


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Implements synchronous CRUD plus the atomic primitives (increment,
    array add/remove, batched update) and asynchronous read operations.
    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: DatabaseManager) -> None:
        """Initialize repository with an injected database manager."""
        self._db_manager = db_manager

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_sync_collection(self) -> Collection:
        """Get synchronous collection instance."""
        return self._db_manager.get_sync_collection(self.collection_name)

    def _get_async_collection(self) -> AsyncIOMotorCollection:
        """Get asynchronous collection instance."""
        return self._db_manager.get_async_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """
        Convert MongoDB document to Pydantic model.

        Raises:
            UnavailableError: If the stored document does not decode
        """
        if document is None:
            return None
        try:
            return self.model_class.model_validate(document)
        except ValidationError as e:
            logger.error(
                f"Malformed {self.collection_name} document {document.get('_id')}: "
                f"{e.error_count()} validation error(s)"
            )
            raise UnavailableError(f"decode {self.collection_name}", e) from e

    def _to_models(self, documents: Iterable[dict[str, Any]]) -> list[T]:
        """
        Convert MongoDB documents to Pydantic models.

        Documents that fail validation are logged and left out so one
        malformed record cannot break a listing.
        """
        models = []
        for doc in documents:
            if doc is None:
                continue
            try:
                models.append(self.model_class.model_validate(doc))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed {self.collection_name} document "
                    f"{doc.get('_id')}: {e.error_count()} validation error(s)"
                )
        return models

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _is_valid_id(id_value: Any) -> bool:
        return isinstance(id_value, ObjectId) or (
            isinstance(id_value, str) and ObjectId.is_valid(id_value)
        )

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        if isinstance(id_value, str) and ObjectId.is_valid(id_value):
            return ObjectId(id_value)
        raise InvalidArgumentError(f"Invalid document id: {id_value!r}")

    # -------------------------------------------------------------------------
    # Synchronous CRUD Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Insert a new document and assign its generated id."""
        collection = self._get_sync_collection()
        document = self._to_document(model)
        document.setdefault("created_at", utcnow())
        document.setdefault("updated_at", document["created_at"])

        with store_errors(f"insert into {self.collection_name}"):
            result: InsertOneResult = collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID; unknown or malformed ids give None."""
        if not self._is_valid_id(id_value):
            return None
        collection = self._get_sync_collection()
        with store_errors(f"get {self.collection_name}"):
            document = collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    def get_many_by_ids(self, ids: Iterable[str | ObjectId]) -> dict[str, T]:
        """Batch-fetch documents by id, keyed by string id. Missing ids are absent."""
        object_ids = list({self._to_object_id(i) for i in ids if self._is_valid_id(i)})
        if not object_ids:
            return {}
        collection = self._get_sync_collection()
        with store_errors(f"batch get {self.collection_name}"):
            documents = list(collection.find({"_id": {"$in": object_ids}}))
        return {model.id_str: model for model in self._to_models(documents)}

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query. A limit of 0 means no limit."""
        collection = self._get_sync_collection()
        with store_errors(f"find {self.collection_name}"):
            cursor = collection.find(query).skip(skip).limit(limit)
            if sort_by:
                cursor = cursor.sort(sort_by, sort_order)
            else:
                cursor = cursor.sort("created_at", -1)
            documents = list(cursor)
        return self._to_models(documents)

    def find_one(self, query: dict[str, Any]) -> Optional[T]:
        """Find a single document matching a query."""
        collection = self._get_sync_collection()
        with store_errors(f"find {self.collection_name}"):
            document = collection.find_one(query)
        return self._to_model(document)

    def update(self, id_value: str | ObjectId, update_data: dict[str, Any]) -> Optional[T]:
        """
        Merge fields into a document by ID.

        Returns the updated document, or None if it does not exist.
        ``updated_at`` is stamped unless the caller supplies it.
        """
        if not self._is_valid_id(id_value):
            return None
        collection = self._get_sync_collection()
        update_data = {**update_data}
        update_data.setdefault("updated_at", utcnow())

        with store_errors(f"update {self.collection_name}"):
            document = collection.find_one_and_update(
                {"_id": self._to_object_id(id_value)},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER,
            )
        if document is not None:
            logger.debug(f"Updated {self.collection_name} document: {id_value}")
        return self._to_model(document)

    def delete(self, id_value: str | ObjectId) -> bool:
        """Delete a document by ID."""
        if not self._is_valid_id(id_value):
            return False
        collection = self._get_sync_collection()
        with store_errors(f"delete {self.collection_name}"):
            result: DeleteResult = collection.delete_one(
                {"_id": self._to_object_id(id_value)}
            )
        if result.deleted_count > 0:
            logger.debug(f"Deleted {self.collection_name} document: {id_value}")
            return True
        return False

    def count(self, query: Optional[dict[str, Any]] = None) -> int:
        """Count documents matching a query."""
        collection = self._get_sync_collection()
        with store_errors(f"count {self.collection_name}"):
            return collection.count_documents(query or {})

    def exists(self, query: dict[str, Any]) -> bool:
        """Check if any document matches the query."""
        collection = self._get_sync_collection()
        with store_errors(f"count {self.collection_name}"):
            return collection.count_documents(query, limit=1) > 0

    # -------------------------------------------------------------------------
    # Atomic Field Operations
    # -------------------------------------------------------------------------

    def _update_one(self, id_value: str | ObjectId, update: dict[str, Any], operation: str) -> bool:
        collection = self._get_sync_collection()
        with store_errors(f"{operation} {self.collection_name}"):
            result: UpdateResult = collection.update_one(
                {"_id": self._to_object_id(id_value)}, update
            )
        return result.matched_count > 0

    def increment(self, id_value: str | ObjectId, field: str, amount: int = 1) -> bool:
        """Atomically add ``amount`` to a numeric field."""
        return self._update_one(id_value, {"$inc": {field: amount}}, "increment")

    def add_to_set(self, id_value: str | ObjectId, field: str, value: Any) -> bool:
        """Atomically add a value to an array field if not already present."""
        return self._update_one(id_value, {"$addToSet": {field: value}}, "array add")

    def pull(self, id_value: str | ObjectId, field: str, value: Any) -> bool:
        """Atomically remove every occurrence of a value from an array field."""
        return self._update_one(id_value, {"$pull": {field: value}}, "array remove")

    def update_many(self, query: dict[str, Any], update_data: dict[str, Any]) -> int:
        """
        Apply the same field merge to every matching document as one batch.

        Runs inside a transaction when transactions are enabled, so the
        batch either fully applies or not at all.
        """
        collection = self._get_sync_collection()
        update_data = {**update_data}
        update_data.setdefault("updated_at", utcnow())
        update = {"$set": update_data}

        with store_errors(f"batch update {self.collection_name}"):
            if self._db_manager.transactions_enabled:
                with self._db_manager.sync_session() as session:
                    with session.start_transaction():
                        result = collection.update_many(query, update, session=session)
            else:
                result = collection.update_many(query, update)

        logger.debug(f"Batch updated {result.modified_count} {self.collection_name} documents")
        return result.modified_count

    # -------------------------------------------------------------------------
    # Asynchronous Read Operations
    # -------------------------------------------------------------------------

    async def get_by_id_async(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID asynchronously."""
        if not self._is_valid_id(id_value):
            return None
        collection = self._get_async_collection()
        with store_errors(f"get {self.collection_name}"):
            document = await collection.find_one({"_id": self._to_object_id(id_value)})
        return self._to_model(document)

    async def find_async(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = -1,
    ) -> list[T]:
        """Find documents matching a query asynchronously."""
        collection = self._get_async_collection()
        with store_errors(f"find {self.collection_name}"):
            cursor = collection.find(query).skip(skip).limit(limit)
            if sort_by:
                cursor = cursor.sort(sort_by, sort_order)
            else:
                cursor = cursor.sort("created_at", -1)
            documents = await cursor.to_list(length=limit or None)
        return self._to_models(documents)
