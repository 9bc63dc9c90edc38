"""
SmartAI Backend - Student Quiz Attempt Routes

    GET    /api/student-quiz         list (student_id, quiz_id, status)
    POST   /api/student-quiz         assign a quiz to a student
    GET    /api/student-quiz/{id}    detail
    PATCH  /api/student-quiz/{id}    progress / score / answers
    DELETE /api/student-quiz/{id}    delete
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from smartai.database import get_database
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.common import DeleteResponse, ErrorResponse, Page
from smartai.schemas.student_quiz import (
    AttemptStatus,
    StudentQuizCreate,
    StudentQuizResponse,
    StudentQuizUpdate,
)
from smartai.services.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smartai.services.student_quiz_service import student_quiz_service

router = APIRouter(
    prefix="/api/student-quiz",
    tags=["Student Quiz Attempts"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Page[StudentQuizResponse], summary="List attempts")
async def list_attempts(
    response: Response,
    student_id: Optional[str] = Query(default=None),
    quiz_id: Optional[str] = Query(default=None),
    status_filter: Optional[AttemptStatus] = Query(default=None, alias="status"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    items, total = await student_quiz_service.list_attempts(
        db,
        user.id,
        student_id=student_id,
        quiz_id=quiz_id,
        status=status_filter,
        skip=skip,
        limit=limit,
    )
    response.headers["X-Total-Count"] = str(total)
    return Page[StudentQuizResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.post(
    "",
    response_model=StudentQuizResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign a quiz to a student",
)
async def create_attempt(
    body: StudentQuizCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_quiz_service.create(db, user.id, body.model_dump())


@router.get("/{attempt_id}", response_model=StudentQuizResponse, summary="Get an attempt")
async def get_attempt(
    attempt_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_quiz_service.get(db, user.id, attempt_id)


@router.patch("/{attempt_id}", response_model=StudentQuizResponse, summary="Update an attempt")
async def update_attempt(
    attempt_id: str,
    body: StudentQuizUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_quiz_service.update(
        db, user.id, attempt_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{attempt_id}", response_model=DeleteResponse, summary="Delete an attempt")
async def delete_attempt(
    attempt_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await student_quiz_service.delete(db, user.id, attempt_id)
    return DeleteResponse(id=attempt_id)
