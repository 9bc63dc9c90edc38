"""
SmartAI Backend - Document Collections
======================================

What:  Collection names and the helpers that move documents between MongoDB
       and the API (ObjectId parsing, `_id` → `id`, timestamps).
Why:   MongoDB has no schema objects; every service agrees on these names and
       conversions instead.

Document layout (every collection):
    _id          ObjectId     exposed as "id"
    owner_id     str          `sub` of the verified access token
    created_at   datetime     UTC, set on insert
    updated_at   datetime     UTC, refreshed on every update

References between documents (folder_id, quiz_id, student_id) are stored as
ObjectId hex strings so they round-trip through JSON unchanged.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from bson import ObjectId
from bson.errors import InvalidId

from smartai.exceptions import ValidationError

QUIZZES = "quizzes"
FOLDERS = "folders"
BOOKMARKS = "bookmarks"
STUDENTS = "students"
STUDENT_QUIZ_ATTEMPTS = "student_quiz_attempts"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value: str, resource: str = "resource") -> ObjectId:
    """
    Convert a path/body id into an ObjectId.

    Raises:
        ValidationError: the value is not a 24-character hex ObjectId (→ 400)
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(
            message=f"Invalid {resource} id '{value}'",
            field="id",
        )


def to_public(document: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a stored document into its API shape (`_id` becomes `id`)."""
    public = {key: value for key, value in document.items() if key != "_id"}
    public["id"] = str(document["_id"])
    return public
