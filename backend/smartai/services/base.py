"""
SmartAI Backend - Owner-Scoped Collection Service
=================================================

What:  Generic create/get/list/update/delete over one MongoDB collection,
       with every query restricted to the caller's documents.
Why:   Quizzes, folders, bookmarks, students and attempts differ only in
       their fields and cross-document checks; the CRUD mechanics and the
       error translation are identical.
How:   Subclasses set `collection_name` and `resource_name`, list the fields
       that may never be cleared, and add hooks (existence checks, cascades).

Error translation:
    malformed id             → ValidationError (400)
    no document for owner    → NotFoundError (404)
    unique index violation   → ConflictError (409)
    any other driver error   → DatabaseError (500, details logged)

Services are stateless; the database handle is passed to every call so each
request uses whatever the connector handed to the route.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from smartai.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    SmartAIError,
    ValidationError,
)
from smartai.models.collections import parse_object_id, to_public, utcnow

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


class OwnedCollectionService:
    collection_name: str = ""
    resource_name: str = "resource"
    # Fields that an update may change but never set to null
    required_fields: FrozenSet[str] = frozenset()
    conflict_message: str = "The resource already exists"

    # ── Helpers ───────────────────────────────────────────────────────────

    def collection(self, db: AsyncDatabase):
        return db[self.collection_name]

    def owner_filter(self, owner_id: str, doc_id: Optional[str] = None) -> Dict[str, Any]:
        query: Dict[str, Any] = {"owner_id": owner_id}
        if doc_id is not None:
            query["_id"] = parse_object_id(doc_id, self.resource_name)
        return query

    @contextmanager
    def translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SmartAIError:
            raise
        except DuplicateKeyError as e:
            logger.info("Duplicate %s on %s: %s", self.resource_name, action, e.details)
            raise ConflictError(
                message=self.conflict_message,
                context={"resource": self.resource_name},
            )
        except PyMongoError as e:
            logger.error(
                "Database error during %s %s: %s", action, self.resource_name, e, exc_info=True
            )
            raise DatabaseError(
                message=f"Could not {action} the {self.resource_name}. Please try again.",
                context={"collection": self.collection_name, "error_type": type(e).__name__},
            )

    # ── Hooks ─────────────────────────────────────────────────────────────

    async def before_create(self, db: AsyncDatabase, owner_id: str, data: Dict[str, Any]) -> None:
        """Validate references before insert. Default: nothing to check."""

    async def before_update(
        self, db: AsyncDatabase, owner_id: str, doc_id: str, changes: Dict[str, Any]
    ) -> None:
        """Validate changes before update. Default: nothing to check."""

    async def after_delete(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> None:
        """Cascade to dependent documents. Default: nothing depends on it."""

    def present(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return to_public(document)

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def create(self, db: AsyncDatabase, owner_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        with self.translate_errors("create"):
            await self.before_create(db, owner_id, data)
            now = utcnow()
            document = {**data, "owner_id": owner_id, "created_at": now, "updated_at": now}
            result = await self.collection(db).insert_one(document)
            document["_id"] = result.inserted_id
            logger.info("Created %s %s for owner %s", self.resource_name, result.inserted_id, owner_id)
            return self.present(document)

    async def get(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> Dict[str, Any]:
        with self.translate_errors("retrieve"):
            document = await self.collection(db).find_one(self.owner_filter(owner_id, doc_id))
            if document is None:
                raise NotFoundError(resource=self.resource_name, resource_id=doc_id)
            return self.present(document)

    async def list_documents(
        self,
        db: AsyncDatabase,
        owner_id: str,
        filters: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        One page of the owner's documents, newest first.

        Returns:
            (documents, total_count) where total_count ignores skip/limit
        """
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        skip = max(0, skip)
        query = {**(filters or {}), "owner_id": owner_id}

        with self.translate_errors("list"):
            cursor = (
                self.collection(db)
                .find(query)
                .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
                .skip(skip)
                .limit(limit)
            )
            documents = await cursor.to_list(length=limit)
            total_count = await self.collection(db).count_documents(query)

        return [self.present(doc) for doc in documents], total_count

    async def update(
        self, db: AsyncDatabase, owner_id: str, doc_id: str, changes: Dict[str, Any]
    ) -> Dict[str, Any]:
        if not changes:
            raise ValidationError(message="No fields to update")
        cleared = sorted(f for f in self.required_fields if f in changes and changes[f] is None)
        if cleared:
            raise ValidationError(
                message=f"{', '.join(cleared)} cannot be null",
                field=cleared[0],
            )

        query = self.owner_filter(owner_id, doc_id)
        with self.translate_errors("update"):
            await self.before_update(db, owner_id, doc_id, changes)
            document = await self.collection(db).find_one_and_update(
                query,
                {"$set": {**changes, "updated_at": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
            if document is None:
                raise NotFoundError(resource=self.resource_name, resource_id=doc_id)
            return self.present(document)

    async def delete(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> None:
        query = self.owner_filter(owner_id, doc_id)
        with self.translate_errors("delete"):
            result = await self.collection(db).delete_one(query)
            if result.deleted_count == 0:
                raise NotFoundError(resource=self.resource_name, resource_id=doc_id)
            await self.after_delete(db, owner_id, doc_id)
        logger.info("Deleted %s %s for owner %s", self.resource_name, doc_id, owner_id)
