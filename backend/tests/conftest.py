"""
SmartAI Backend - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No MongoDB and no SMTP server are needed: collections are mocks, and
       routes get the fake database and a fixed user through FastAPI
       dependency overrides.

Fixture Hierarchy:
    ├── fake_db:        FakeDatabase whose collections are mocks
    ├── current_user:   The authenticated CurrentUser routes receive
    ├── make_token:     Signs JWTs with the test secret
    ├── test_client:    HTTPX AsyncClient, DB and user overridden
    └── raw_client:     HTTPX AsyncClient on an app with real auth/DB deps
"""

import os

# Override settings for testing BEFORE any smartai imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/smartai_test"
for name in ("CLIENT_URL", "FRONTEND_URL", "VERCEL_URL", "ALLOW_VERCEL_PREVIEWS", "SMTP_HOST"):
    os.environ.pop(name, None)

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from jose import jwt

from smartai.middleware.auth import CurrentUser

OWNER_ID = "user-1"


def make_collection(documents: Optional[List[Dict[str, Any]]] = None) -> MagicMock:
    """
    A mock AsyncCollection.

    `find()` returns a chainable cursor (sort/skip/limit return the cursor)
    whose `to_list()` yields `documents`; `count_documents()` yields their
    number. Every other coroutine method is an AsyncMock the test configures.
    """
    documents = documents or []
    collection = MagicMock()

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    collection.find.return_value = cursor
    collection.cursor = cursor

    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
    collection.update_many = AsyncMock(return_value=MagicMock(modified_count=0))
    collection.count_documents = AsyncMock(return_value=len(documents))
    collection.create_indexes = AsyncMock(return_value=[])
    return collection


class FakeDatabase:
    """Dict of mock collections; `db["name"]` creates one on first access."""

    def __init__(self, name: str = "smartai_test"):
        self.name = name
        self.collections: Dict[str, MagicMock] = {}

    def __getitem__(self, name: str) -> MagicMock:
        return self.collections.setdefault(name, make_collection())

    def set(self, name: str, collection: MagicMock) -> MagicMock:
        self.collections[name] = collection
        return collection


def stored_document(**fields: Any) -> Dict[str, Any]:
    """A document as MongoDB would return it for OWNER_ID."""
    now = datetime.now(timezone.utc)
    document = {"_id": ObjectId(), "owner_id": OWNER_ID, "created_at": now, "updated_at": now}
    document.update(fields)
    return document


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def current_user() -> CurrentUser:
    return CurrentUser(id=OWNER_ID, email="instructor@example.com", name="Test Instructor", role="instructor")


@pytest.fixture
def make_token():
    """
    Signs a token with the test secret.

    Usage:
        token = make_token(sub="user-1", expires_in=-60)  # already expired
    """
    def _make(secret: str = "test-secret", expires_in: int = 3600, **claims: Any) -> str:
        payload = {"sub": OWNER_ID, **claims}
        payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        payload = {k: v for k, v in payload.items() if v is not None}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest_asyncio.fixture
async def test_client(fake_db, current_user):
    """
    HTTPX AsyncClient on a fresh app with the database and the user
    overridden.

    Usage:
        async def test_list(test_client, fake_db):
            response = await test_client.get("/api/quiz")
    """
    from smartai.database import get_database
    from smartai.main import create_app
    from smartai.middleware.auth import get_current_user

    app = create_app()
    app.dependency_overrides[get_database] = lambda: fake_db
    app.dependency_overrides[get_current_user] = lambda: current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        client.app = app
        yield client


@pytest_asyncio.fixture
async def raw_client(fake_db):
    """Like test_client, but tokens are really verified."""
    from smartai.database import get_database
    from smartai.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: fake_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        client.app = app
        yield client
