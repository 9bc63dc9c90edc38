"""
SmartAI Backend - Bookmark Service

One bookmark per (owner, quiz). The quiz must exist for the owner; a second
bookmark of the same quiz is a 409, checked up front and backed by the
unique index for concurrent requests.
"""

from typing import Any, Dict

from pymongo.asynchronous.database import AsyncDatabase

from smartai.exceptions import ConflictError, NotFoundError, ValidationError
from smartai.models.collections import BOOKMARKS, QUIZZES, parse_object_id
from smartai.services.base import OwnedCollectionService


class BookmarkService(OwnedCollectionService):
    collection_name = BOOKMARKS
    resource_name = "bookmark"
    conflict_message = "This quiz is already bookmarked"

    async def before_create(self, db: AsyncDatabase, owner_id: str, data: Dict[str, Any]) -> None:
        quiz_id = data["quiz_id"]
        quiz = await db[QUIZZES].find_one(
            {"_id": parse_object_id(quiz_id, "quiz"), "owner_id": owner_id},
            projection={"_id": 1},
        )
        if quiz is None:
            raise ValidationError(message=f"Quiz '{quiz_id}' does not exist", field="quiz_id")

        existing = await self.collection(db).find_one(
            {"owner_id": owner_id, "quiz_id": quiz_id}, projection={"_id": 1}
        )
        if existing is not None:
            raise ConflictError(
                message=self.conflict_message,
                context={"bookmark_id": str(existing["_id"])},
            )

    async def delete_by_quiz(self, db: AsyncDatabase, owner_id: str, quiz_id: str) -> None:
        """Un-bookmark a quiz without knowing the bookmark id."""
        parse_object_id(quiz_id, "quiz")
        with self.translate_errors("delete"):
            result = await self.collection(db).delete_one({"owner_id": owner_id, "quiz_id": quiz_id})
            if result.deleted_count == 0:
                raise NotFoundError(resource="bookmark for quiz", resource_id=quiz_id)


bookmark_service = BookmarkService()
