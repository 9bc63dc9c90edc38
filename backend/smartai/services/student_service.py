"""
SmartAI Backend - Student Service

Students are unique per (owner, email). Deleting a student deletes the
student's quiz attempts with it.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from pymongo.asynchronous.database import AsyncDatabase

from smartai.models.collections import STUDENT_QUIZ_ATTEMPTS, STUDENTS
from smartai.services.base import DEFAULT_PAGE_SIZE, OwnedCollectionService

logger = logging.getLogger(__name__)


class StudentService(OwnedCollectionService):
    collection_name = STUDENTS
    resource_name = "student"
    required_fields = frozenset({"name", "email"})
    conflict_message = "A student with this email already exists"

    async def after_delete(self, db: AsyncDatabase, owner_id: str, doc_id: str) -> None:
        result = await db[STUDENT_QUIZ_ATTEMPTS].delete_many(
            {"owner_id": owner_id, "student_id": doc_id}
        )
        if result.deleted_count:
            logger.info("Removed %d attempts of deleted student %s", result.deleted_count, doc_id)

    async def list_students(
        self,
        db: AsyncDatabase,
        owner_id: str,
        search: Optional[str] = None,
        class_name: Optional[str] = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[List[Dict[str, Any]], int]:
        filters: Dict[str, Any] = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            filters["$or"] = [{"name": pattern}, {"email": pattern}]
        if class_name:
            filters["class_name"] = class_name
        return await self.list_documents(db, owner_id, filters=filters, skip=skip, limit=limit)


student_service = StudentService()
