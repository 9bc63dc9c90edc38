"""
SmartAI Backend - Quiz Service
==============================

Owner-scoped quiz storage. Beyond the generic CRUD:
    - a quiz may only be filed under a folder the owner has
    - listing filters by folder, tag, and a case-insensitive title search
    - deleting a quiz removes the owner's bookmarks of it; attempts are kept
      as history
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from pymongo.asynchronous.database import AsyncDatabase

from smartai.exceptions import ValidationError
from smartai.models.collections import BOOKMARKS, FOLDERS, QUIZZES, parse_object_id
from smartai.services.base import DEFAULT_PAGE_SIZE, OwnedCollectionService

logger = logging.getLogger(__name__)


class QuizService(OwnedCollectionService):
    collection_name = QUIZZES
    resource_name = "quiz"
    required_fields = frozenset({"title", "tags", "questions"})

    async def _check_folder(self, db: AsyncDatabase, owner_id: str, folder_id: Optional[str]) -> None:
        if folder_id is None:
            return
        folder = await db[FOLDERS].find_one(
            {"_id": parse_object_id(folder_id, "folder"), "owner_id": owner_id},
            projection={"_id": 1},
        )
        if folder is None:
            raise ValidationError(message=f"Folder '{folder_id}' does not exist", field="folder_id")

    async def before_create(self, db: AsyncDatabase, owner_id: str, data: Dict[str, Any]) -> None:
        await self._check_folder(db, owner_id, data.get("folder_id"))

    async def before_update(
        self, db: AsyncDatabase, owner_id: str, doc_id: str, changes: Dict[str, Any]
    ) -> None:
        await self._check_folder(db, owner_id, changes.get("folder_id"))

    async def after_delete(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> None:
        result = await db[BOOKMARKS].delete_many({"owner_id": owner_id, "quiz_id": doc_id})
        if result.deleted_count:
            logger.info("Removed %d bookmarks of deleted quiz %s", result.deleted_count, doc_id)

    def present(self, document: Dict[str, Any]) -> Dict[str, Any]:
        public = super().present(document)
        public["question_count"] = len(public.get("questions") or [])
        return public

    async def list_quizzes(
        self,
        db: AsyncDatabase,
        owner_id: str,
        folder_id: Optional[str] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[List[Dict[str, Any]], int]:
        filters: Dict[str, Any] = {}
        if folder_id:
            parse_object_id(folder_id, "folder")
            filters["folder_id"] = folder_id
        if tag:
            filters["tags"] = tag
        if search:
            filters["title"] = {"$regex": re.escape(search), "$options": "i"}
        return await self.list_documents(db, owner_id, filters=filters, skip=skip, limit=limit)


quiz_service = QuizService()
