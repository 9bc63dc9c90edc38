"""
SmartAI Backend - Folder Routes

    GET    /api/folders                 list
    POST   /api/folders                 create (name unique per owner → 409)
    GET    /api/folders/{id}            detail with quiz_count
    GET    /api/folders/{id}/quizzes    quizzes filed under the folder
    PATCH  /api/folders/{id}            partial update
    DELETE /api/folders/{id}            delete, detaching its quizzes
"""

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from smartai.database import get_database
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.common import DeleteResponse, ErrorResponse, Page
from smartai.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from smartai.schemas.quiz import QuizResponse
from smartai.services.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smartai.services.folder_service import folder_service
from smartai.services.quiz_service import quiz_service

router = APIRouter(
    prefix="/api/folders",
    tags=["Folders"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Page[FolderResponse], summary="List folders")
async def list_folders(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    items, total = await folder_service.list_documents(db, user.id, skip=skip, limit=limit)
    response.headers["X-Total-Count"] = str(total)
    return Page[FolderResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.post(
    "",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create a folder",
)
async def create_folder(
    body: FolderCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await folder_service.create(db, user.id, body.model_dump())


@router.get("/{folder_id}", response_model=FolderResponse, summary="Get a folder")
async def get_folder(
    folder_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await folder_service.summary(db, user.id, folder_id)


@router.get("/{folder_id}/quizzes", response_model=Page[QuizResponse], summary="List quizzes in a folder")
async def list_folder_quizzes(
    folder_id: str,
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    # 404 for a folder the caller does not have, not an empty page
    await folder_service.get(db, user.id, folder_id)
    items, total = await quiz_service.list_quizzes(db, user.id, folder_id=folder_id, skip=skip, limit=limit)
    response.headers["X-Total-Count"] = str(total)
    return Page[QuizResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.patch(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Update a folder",
)
async def update_folder(
    folder_id: str,
    body: FolderUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await folder_service.update(db, user.id, folder_id, body.model_dump(exclude_unset=True))


@router.delete("/{folder_id}", response_model=DeleteResponse, summary="Delete a folder")
async def delete_folder(
    folder_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await folder_service.delete(db, user.id, folder_id)
    return DeleteResponse(id=folder_id)
