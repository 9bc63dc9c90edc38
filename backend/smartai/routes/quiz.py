"""
SmartAI Backend - Quiz Routes
=============================

    GET    /api/quiz          list (folder_id, tag, search, skip, limit)
    POST   /api/quiz          create
    GET    /api/quiz/{id}     detail
    PATCH  /api/quiz/{id}     partial update
    DELETE /api/quiz/{id}     delete (and the owner's bookmarks of it)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from smartai.database import get_database
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.common import DeleteResponse, ErrorResponse, Page
from smartai.schemas.quiz import QuizCreate, QuizResponse, QuizUpdate
from smartai.services.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smartai.services.quiz_service import quiz_service

router = APIRouter(
    prefix="/api/quiz",
    tags=["Quizzes"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Page[QuizResponse], summary="List quizzes")
async def list_quizzes(
    response: Response,
    folder_id: Optional[str] = Query(default=None, description="Only quizzes in this folder"),
    tag: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100, description="Title contains (case-insensitive)"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    items, total = await quiz_service.list_quizzes(
        db, user.id, folder_id=folder_id, tag=tag, search=search, skip=skip, limit=limit
    )
    response.headers["X-Total-Count"] = str(total)
    return Page[QuizResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED, summary="Create a quiz")
async def create_quiz(
    body: QuizCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await quiz_service.create(db, user.id, body.model_dump())


@router.get("/{quiz_id}", response_model=QuizResponse, summary="Get a quiz")
async def get_quiz(
    quiz_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await quiz_service.get(db, user.id, quiz_id)


@router.patch("/{quiz_id}", response_model=QuizResponse, summary="Update a quiz")
async def update_quiz(
    quiz_id: str,
    body: QuizUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await quiz_service.update(db, user.id, quiz_id, body.model_dump(exclude_unset=True))


@router.delete("/{quiz_id}", response_model=DeleteResponse, summary="Delete a quiz")
async def delete_quiz(
    quiz_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await quiz_service.delete(db, user.id, quiz_id)
    return DeleteResponse(id=quiz_id)
