"""
FixNexus Backend: Document Store Adapter
==========================================

What:  Thin async adapter over one MongoDB collection.
How:   Wraps pymongo's AsyncCollection; converts path ids to ObjectId,
       serializes documents for JSON, and shapes write results.
Who:   Route handlers, through the stores exposed by MongoDatabase.

Error Handling:
    - Malformed ids raise ValidationError (400) before touching the database.
    - Any PyMongoError is logged and re-raised as DatabaseError (500).
    - Nothing is retried; a failed operation surfaces to the caller.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from fixnexus.exceptions import DatabaseError, ValidationError
from fixnexus.schemas.documents import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)


def to_object_id(id_str: str) -> ObjectId:
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise ValidationError(message=f"'{id_str}' is not a valid document id", field="id")


def serialize(value: Any) -> Any:
    """Recursively render ObjectIds as hex strings so documents are JSON-safe."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize(v) for v in value]
    return value


def _settable(fields: Mapping[str, Any]) -> Dict[str, Any]:
    # _id is immutable in MongoDB; the path id is authoritative
    return {k: v for k, v in fields.items() if k != "_id"}


class DocumentStore:
    """
    Per-collection operations used by the route handlers.

    Documents are stored verbatim; there is no schema validation.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    def _failed(self, operation: str, exc: Exception) -> DatabaseError:
        logger.error(
            "MongoDB %s on '%s' failed: %s", operation, self.name, str(exc), exc_info=True
        )
        return DatabaseError(
            context={"collection": self.name, "operation": operation, "error_type": type(exc).__name__},
        )

    async def find_many(
        self,
        filter: Optional[Dict[str, Any]] = None,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Matching documents in natural (insertion) order.

        skip and limit are applied independently when given; GET /services only
        passes them when both page and size were supplied.
        """
        try:
            cursor = self.collection.find(filter or {})
            if skip is not None:
                cursor = cursor.skip(skip)
            if limit is not None:
                cursor = cursor.limit(limit)
            documents = await cursor.to_list()
        except PyMongoError as e:
            raise self._failed("find", e)
        return [serialize(doc) for doc in documents]

    async def find_one(self, id: str) -> Optional[Dict[str, Any]]:
        """The document with this id, or None when it does not exist."""
        oid = to_object_id(id)
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._failed("find_one", e)
        return serialize(document) if document is not None else None

    async def count(self, filter: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await self.collection.count_documents(filter or {})
        except PyMongoError as e:
            raise self._failed("count", e)

    async def insert_one(self, document: Dict[str, Any]) -> InsertResult:
        # insert_one mutates its argument by adding _id; keep the caller's dict intact
        payload = dict(document)
        try:
            result = await self.collection.insert_one(payload)
        except PyMongoError as e:
            raise self._failed("insert_one", e)
        logger.info("Inserted %s into '%s'", result.inserted_id, self.name)
        return InsertResult(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))

    async def replace_or_insert(self, id: str, document: Dict[str, Any]) -> UpdateResult:
        """
        Upsert keyed by id with merge semantics.

        Supplied fields overwrite, fields missing from ``document`` are kept.
        When no document has this id a new one is created under it.
        """
        oid = to_object_id(id)
        return await self._update("replace_or_insert", oid, document, upsert=True)

    async def merge_fields(self, id: str, partial: Dict[str, Any]) -> UpdateResult:
        """Merge only the supplied fields; an unknown id has no effect (matchedCount 0)."""
        oid = to_object_id(id)
        return await self._update("merge_fields", oid, partial, upsert=False)

    async def _update(
        self, operation: str, oid: ObjectId, fields: Dict[str, Any], upsert: bool
    ) -> UpdateResult:
        try:
            result = await self.collection.update_one(
                {"_id": oid}, {"$set": _settable(fields)}, upsert=upsert
            )
        except PyMongoError as e:
            raise self._failed(operation, e)
        upserted_id = result.upserted_id
        return UpdateResult(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(upserted_id) if upserted_id is not None else None,
            upserted_count=1 if upserted_id is not None else 0,
        )

    async def delete_one(self, id: str) -> DeleteResult:
        oid = to_object_id(id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            raise self._failed("delete_one", e)
        if result.deleted_count:
            logger.info("Deleted %s from '%s'", oid, self.name)
        return DeleteResult(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
