"""
SmartAI Backend - Bookmark Routes

    GET    /api/bookmarks                 list
    POST   /api/bookmarks                 bookmark a quiz (409 if already)
    DELETE /api/bookmarks/{id}            remove by bookmark id
    DELETE /api/bookmarks/quiz/{quiz_id}  remove by quiz id
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from smartai.database import get_database
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.bookmark import BookmarkCreate, BookmarkResponse
from smartai.schemas.common import DeleteResponse, ErrorResponse, Page
from smartai.services.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smartai.services.bookmark_service import bookmark_service

router = APIRouter(
    prefix="/api/bookmarks",
    tags=["Bookmarks"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Page[BookmarkResponse], summary="List bookmarks")
async def list_bookmarks(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    items, total = await bookmark_service.list_documents(db, user.id, skip=skip, limit=limit)
    response.headers["X-Total-Count"] = str(total)
    return Page[BookmarkResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Bookmark a quiz",
)
async def create_bookmark(
    body: BookmarkCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await bookmark_service.create(db, user.id, body.model_dump())


@router.delete("/quiz/{quiz_id}", response_model=DeleteResponse, summary="Remove the bookmark of a quiz")
async def delete_bookmark_by_quiz(
    quiz_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await bookmark_service.delete_by_quiz(db, user.id, quiz_id)
    return DeleteResponse(id=quiz_id)


@router.delete("/{bookmark_id}", response_model=DeleteResponse, summary="Remove a bookmark")
async def delete_bookmark(
    bookmark_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await bookmark_service.delete(db, user.id, bookmark_id)
    return DeleteResponse(id=bookmark_id)
