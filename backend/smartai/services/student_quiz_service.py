"""
SmartAI Backend - Student Quiz Attempt Service
==============================================

What:  Records which quizzes were assigned to which students and how far each
       student got.
Rules:
    - student and quiz must both belong to the owner
    - completed_at is stamped when an attempt is created as, or moves to,
      "completed", and cleared when it moves back out of it
    - scores are stored as reported; nothing is graded here, but a score
      never exceeds max_score, counting the stored value of whichever of
      the two a PATCH leaves out
"""

from typing import Any, Dict, List, Optional, Tuple

from pymongo.asynchronous.database import AsyncDatabase

from smartai.exceptions import ValidationError
from smartai.models.collections import (
    QUIZZES,
    STUDENT_QUIZ_ATTEMPTS,
    STUDENTS,
    parse_object_id,
    utcnow,
)
from smartai.services.base import DEFAULT_PAGE_SIZE, OwnedCollectionService

COMPLETED = "completed"


class StudentQuizService(OwnedCollectionService):
    collection_name = STUDENT_QUIZ_ATTEMPTS
    resource_name = "student quiz attempt"
    required_fields = frozenset({"status", "answers"})

    async def _require(self, db: AsyncDatabase, collection: str, owner_id: str, doc_id: str, field: str) -> None:
        found = await db[collection].find_one(
            {"_id": parse_object_id(doc_id, field), "owner_id": owner_id},
            projection={"_id": 1},
        )
        if found is None:
            raise ValidationError(message=f"{field} '{doc_id}' does not exist", field=field)

    async def before_create(self, db: AsyncDatabase, owner_id: str, data: Dict[str, Any]) -> None:
        await self._require(db, STUDENTS, owner_id, data["student_id"], "student_id")
        await self._require(db, QUIZZES, owner_id, data["quiz_id"], "quiz_id")
        data["completed_at"] = utcnow() if data.get("status") == COMPLETED else None

    async def _check_score(
        self, db: AsyncDatabase, owner_id: str, doc_id: str, changes: Dict[str, Any]
    ) -> None:
        if "score" not in changes and "max_score" not in changes:
            return
        merged = {key: changes[key] for key in ("score", "max_score") if key in changes}
        if len(merged) < 2:
            stored = await self.collection(db).find_one(
                self.owner_filter(owner_id, doc_id),
                projection={"score": 1, "max_score": 1},
            )
            if stored is None:
                return
            merged = {**stored, **merged}

        score, max_score = merged.get("score"), merged.get("max_score")
        if score is not None and max_score is not None and score > max_score:
            raise ValidationError(message="score cannot exceed max_score", field="score")

    async def before_update(
        self, db: AsyncDatabase, owner_id: str, doc_id: str, changes: Dict[str, Any]
    ) -> None:
        await self._check_score(db, owner_id, doc_id, changes)
        if "status" in changes:
            changes["completed_at"] = utcnow() if changes["status"] == COMPLETED else None

    async def list_attempts(
        self,
        db: AsyncDatabase,
        owner_id: str,
        student_id: Optional[str] = None,
        quiz_id: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Tuple[List[Dict[str, Any]], int]:
        filters: Dict[str, Any] = {}
        if student_id:
            parse_object_id(student_id, "student")
            filters["student_id"] = student_id
        if quiz_id:
            parse_object_id(quiz_id, "quiz")
            filters["quiz_id"] = quiz_id
        if status:
            filters["status"] = status
        return await self.list_documents(db, owner_id, filters=filters, skip=skip, limit=limit)


student_quiz_service = StudentQuizService()
