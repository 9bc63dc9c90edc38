"""
SmartAI Backend - Resource Route Tests
======================================

What:  HTTP-level tests for the resource routers with the services mocked.
Why:   Services are unit-tested separately; here we check status codes,
       query parameter handling, the X-Total-Count header, and that every
       call is made for the authenticated owner.
"""

from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId

from conftest import OWNER_ID, stored_document
from smartai.exceptions import ConflictError, NotFoundError, ValidationError
from smartai.models.collections import to_public


def public(**fields):
    return to_public(stored_document(**fields))


class TestQuizRoutes:

    @pytest.mark.asyncio
    async def test_list(self, test_client, fake_db):
        quiz = public(title="Fractions", tags=["math"], questions=[], question_count=0)
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.list_quizzes = AsyncMock(return_value=([quiz], 31))
            response = await test_client.get("/api/quiz?tag=math&skip=30&limit=1")

        assert response.status_code == 200
        assert response.headers["x-total-count"] == "31"
        body = response.json()
        assert body["total_count"] == 31
        assert body["skip"] == 30
        assert body["items"][0]["title"] == "Fractions"
        service.list_quizzes.assert_awaited_once_with(
            fake_db, OWNER_ID, folder_id=None, tag="math", search=None, skip=30, limit=1
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["limit=0", "limit=201", "skip=-1"])
    async def test_list_rejects_bad_paging(self, test_client, query):
        response = await test_client.get(f"/api/quiz?{query}")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create(self, test_client, fake_db):
        created = public(title="Fractions", tags=[], questions=[{"q": "?"}], question_count=1)
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.create = AsyncMock(return_value=created)
            response = await test_client.post(
                "/api/quiz", json={"title": "Fractions", "questions": [{"q": "?"}]}
            )

        assert response.status_code == 201
        assert response.json()["question_count"] == 1
        data = service.create.await_args.args[2]
        assert data["title"] == "Fractions"
        assert data["folder_id"] is None

    @pytest.mark.asyncio
    async def test_create_with_malformed_folder_id(self, test_client):
        response = await test_client.post("/api/quiz", json={"title": "Fractions", "folder_id": "abc"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_sends_only_given_fields(self, test_client, fake_db):
        quiz = public(title="New", tags=[], questions=[], question_count=0)
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.update = AsyncMock(return_value=quiz)
            response = await test_client.patch(f"/api/quiz/{quiz['id']}", json={"title": "New"})

        assert response.status_code == 200
        service.update.assert_awaited_once_with(fake_db, OWNER_ID, quiz["id"], {"title": "New"})

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client):
        quiz_id = str(ObjectId())
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.get = AsyncMock(side_effect=NotFoundError(resource="quiz", resource_id=quiz_id))
            response = await test_client.get(f"/api/quiz/{quiz_id}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"
        assert quiz_id in response.json()["message"]

    @pytest.mark.asyncio
    async def test_get_invalid_id(self, test_client):
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.get = AsyncMock(side_effect=ValidationError(message="Invalid quiz id 'x'", field="id"))
            response = await test_client.get("/api/quiz/x")

        assert response.status_code == 400
        assert response.json()["details"] == {"field": "id"}

    @pytest.mark.asyncio
    async def test_delete(self, test_client, fake_db):
        quiz_id = str(ObjectId())
        with patch("smartai.routes.quiz.quiz_service") as service:
            service.delete = AsyncMock(return_value=None)
            response = await test_client.delete(f"/api/quiz/{quiz_id}")

        assert response.status_code == 200
        assert response.json() == {"id": quiz_id, "deleted": True}
        service.delete.assert_awaited_once_with(fake_db, OWNER_ID, quiz_id)


class TestFolderRoutes:

    @pytest.mark.asyncio
    async def test_create_duplicate_is_409(self, test_client):
        with patch("smartai.routes.folders.folder_service") as service:
            service.create = AsyncMock(side_effect=ConflictError(message="A folder with this name already exists"))
            response = await test_client.post("/api/folders", json={"name": "Algebra"})

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_invalid_color_rejected(self, test_client):
        response = await test_client.post("/api/folders", json={"name": "Algebra", "color": "red"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_includes_quiz_count(self, test_client):
        folder = public(name="Algebra", quiz_count=4)
        with patch("smartai.routes.folders.folder_service") as service:
            service.summary = AsyncMock(return_value=folder)
            response = await test_client.get(f"/api/folders/{folder['id']}")

        assert response.status_code == 200
        assert response.json()["quiz_count"] == 4

    @pytest.mark.asyncio
    async def test_folder_quizzes(self, test_client, fake_db):
        folder = public(name="Algebra")
        with patch("smartai.routes.folders.folder_service") as folders, \
             patch("smartai.routes.folders.quiz_service") as quizzes:
            folders.get = AsyncMock(return_value=folder)
            quizzes.list_quizzes = AsyncMock(return_value=([], 0))
            response = await test_client.get(f"/api/folders/{folder['id']}/quizzes")

        assert response.status_code == 200
        assert response.headers["x-total-count"] == "0"
        quizzes.list_quizzes.assert_awaited_once_with(
            fake_db, OWNER_ID, folder_id=folder["id"], skip=0, limit=50
        )

    @pytest.mark.asyncio
    async def test_folder_quizzes_unknown_folder(self, test_client):
        folder_id = str(ObjectId())
        with patch("smartai.routes.folders.folder_service") as folders, \
             patch("smartai.routes.folders.quiz_service") as quizzes:
            folders.get = AsyncMock(side_effect=NotFoundError(resource="folder", resource_id=folder_id))
            quizzes.list_quizzes = AsyncMock()
            response = await test_client.get(f"/api/folders/{folder_id}/quizzes")

        assert response.status_code == 404
        quizzes.list_quizzes.assert_not_awaited()


class TestBookmarkRoutes:

    @pytest.mark.asyncio
    async def test_delete_by_quiz_is_not_shadowed(self, test_client, fake_db):
        quiz_id = str(ObjectId())
        with patch("smartai.routes.bookmarks.bookmark_service") as service:
            service.delete_by_quiz = AsyncMock(return_value=None)
            service.delete = AsyncMock(return_value=None)
            response = await test_client.delete(f"/api/bookmarks/quiz/{quiz_id}")

        assert response.status_code == 200
        service.delete_by_quiz.assert_awaited_once_with(fake_db, OWNER_ID, quiz_id)
        service.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create(self, test_client):
        quiz_id = str(ObjectId())
        bookmark = public(quiz_id=quiz_id, note=None)
        with patch("smartai.routes.bookmarks.bookmark_service") as service:
            service.create = AsyncMock(return_value=bookmark)
            response = await test_client.post("/api/bookmarks", json={"quiz_id": quiz_id})

        assert response.status_code == 201
        assert response.json()["quiz_id"] == quiz_id


class TestStudentRoutes:

    @pytest.mark.asyncio
    async def test_create_lowercases_email(self, test_client):
        student = public(name="Ada", email="ada@example.com")
        with patch("smartai.routes.students.student_service") as service:
            service.create = AsyncMock(return_value=student)
            response = await test_client.post(
                "/api/students", json={"name": "Ada", "email": "  Ada@Example.com "}
            )

        assert response.status_code == 201
        assert service.create.await_args.args[2]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, test_client):
        response = await test_client.post("/api/students", json={"name": "Ada", "email": "nope"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_list_search(self, test_client, fake_db):
        with patch("smartai.routes.students.student_service") as service:
            service.list_students = AsyncMock(return_value=([], 0))
            response = await test_client.get("/api/students?search=ada&class_name=7B")

        assert response.status_code == 200
        service.list_students.assert_awaited_once_with(
            fake_db, OWNER_ID, search="ada", class_name="7B", skip=0, limit=50
        )


class TestStudentQuizRoutes:

    @pytest.mark.asyncio
    async def test_status_filter(self, test_client, fake_db):
        with patch("smartai.routes.student_quiz.student_quiz_service") as service:
            service.list_attempts = AsyncMock(return_value=([], 0))
            response = await test_client.get("/api/student-quiz?status=completed")

        assert response.status_code == 200
        service.list_attempts.assert_awaited_once_with(
            fake_db, OWNER_ID, student_id=None, quiz_id=None, status="completed", skip=0, limit=50
        )

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, test_client):
        response = await test_client.get("/api/student-quiz?status=graded")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_score_above_max_rejected(self, test_client):
        response = await test_client.post(
            "/api/student-quiz",
            json={
                "student_id": str(ObjectId()),
                "quiz_id": str(ObjectId()),
                "score": 11,
                "max_score": 10,
            },
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create(self, test_client):
        attempt = public(
            student_id=str(ObjectId()),
            quiz_id=str(ObjectId()),
            status="assigned",
            answers=[],
            completed_at=None,
        )
        with patch("smartai.routes.student_quiz.student_quiz_service") as service:
            service.create = AsyncMock(return_value=attempt)
            response = await test_client.post(
                "/api/student-quiz",
                json={"student_id": attempt["student_id"], "quiz_id": attempt["quiz_id"]},
            )

        assert response.status_code == 201
        assert response.json()["status"] == "assigned"
        assert service.create.await_args.args[2]["status"] == "assigned"
