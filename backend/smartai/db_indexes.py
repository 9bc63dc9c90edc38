"""
SmartAI Backend - Collection Indexes
====================================

Index definitions for every collection, created once after the first
successful connect (see database.py). `create_indexes` is idempotent:
MongoDB ignores an index that already exists with the same spec.

Every index leads with owner_id because every query is owner-scoped.
"""

import logging
from typing import Dict, List

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.asynchronous.database import AsyncDatabase

from smartai.models.collections import (
    BOOKMARKS,
    FOLDERS,
    QUIZZES,
    STUDENT_QUIZ_ATTEMPTS,
    STUDENTS,
)

logger = logging.getLogger(__name__)

INDEXES: Dict[str, List[IndexModel]] = {
    QUIZZES: [
        IndexModel([("owner_id", ASCENDING), ("created_at", DESCENDING)], name="owner_recent"),
        IndexModel([("owner_id", ASCENDING), ("folder_id", ASCENDING)], name="owner_folder"),
    ],
    FOLDERS: [
        IndexModel([("owner_id", ASCENDING), ("name", ASCENDING)], name="owner_name_unique", unique=True),
    ],
    BOOKMARKS: [
        IndexModel([("owner_id", ASCENDING), ("quiz_id", ASCENDING)], name="owner_quiz_unique", unique=True),
    ],
    STUDENTS: [
        IndexModel([("owner_id", ASCENDING), ("email", ASCENDING)], name="owner_email_unique", unique=True),
        IndexModel([("owner_id", ASCENDING), ("created_at", DESCENDING)], name="owner_recent"),
    ],
    STUDENT_QUIZ_ATTEMPTS: [
        IndexModel([("owner_id", ASCENDING), ("student_id", ASCENDING)], name="owner_student"),
        IndexModel([("owner_id", ASCENDING), ("quiz_id", ASCENDING)], name="owner_quiz"),
    ],
}


async def create_indexes(db: AsyncDatabase) -> None:
    """
    Create all indexes in INDEXES.

    Raises whatever the driver raises; the connector decides whether an
    index failure matters (it does not: the app works without them).
    """
    for collection_name, models in INDEXES.items():
        names = await db[collection_name].create_indexes(models)
        logger.debug("Indexes ensured on %s: %s", collection_name, names)
