"""
SmartAI Backend - Folder Service

Folder names are unique per owner (unique index → 409). Deleting a folder
detaches its quizzes (folder_id set to null); the quizzes themselves stay.
"""

import logging
from typing import Any, Dict

from pymongo.asynchronous.database import AsyncDatabase

from smartai.models.collections import FOLDERS, QUIZZES, utcnow
from smartai.services.base import OwnedCollectionService

logger = logging.getLogger(__name__)


class FolderService(OwnedCollectionService):
    collection_name = FOLDERS
    resource_name = "folder"
    required_fields = frozenset({"name"})
    conflict_message = "A folder with this name already exists"

    async def after_delete(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> None:
        result = await db[QUIZZES].update_many(
            {"owner_id": owner_id, "folder_id": doc_id},
            {"$set": {"folder_id": None, "updated_at": utcnow()}},
        )
        if result.modified_count:
            logger.info("Detached %d quizzes from deleted folder %s", result.modified_count, doc_id)

    async def summary(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> Dict[str, Any]:
        """Folder document plus the number of quizzes filed under it."""
        folder = await self.get(db, owner_id, doc_id)
        with self.translate_errors("retrieve"):
            folder["quiz_count"] = await db[QUIZZES].count_documents(
                {"owner_id": owner_id, "folder_id": doc_id}
            )
        return folder


folder_service = FolderService()
