"""
SmartAI Backend - Student Routes

    GET    /api/students         list (search on name/email, class_name)
    POST   /api/students         create (email unique per owner → 409)
    GET    /api/students/{id}    detail
    PATCH  /api/students/{id}    partial update
    DELETE /api/students/{id}    delete, with the student's attempts
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from smartai.database import get_database
from smartai.middleware.auth import CurrentUser, get_current_user
from smartai.schemas.common import DeleteResponse, ErrorResponse, Page
from smartai.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from smartai.services.base import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from smartai.services.student_service import student_service

router = APIRouter(
    prefix="/api/students",
    tags=["Students"],
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)


@router.get("", response_model=Page[StudentResponse], summary="List students")
async def list_students(
    response: Response,
    search: Optional[str] = Query(default=None, max_length=100),
    class_name: Optional[str] = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    items, total = await student_service.list_students(
        db, user.id, search=search, class_name=class_name, skip=skip, limit=limit
    )
    response.headers["X-Total-Count"] = str(total)
    return Page[StudentResponse](items=items, total_count=total, skip=skip, limit=limit)


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create a student",
)
async def create_student(
    body: StudentCreate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_service.create(db, user.id, body.model_dump())


@router.get("/{student_id}", response_model=StudentResponse, summary="Get a student")
async def get_student(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_service.get(db, user.id, student_id)


@router.patch(
    "/{student_id}",
    response_model=StudentResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Update a student",
)
async def update_student(
    student_id: str,
    body: StudentUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    return await student_service.update(db, user.id, student_id, body.model_dump(exclude_unset=True))


@router.delete("/{student_id}", response_model=DeleteResponse, summary="Delete a student")
async def delete_student(
    student_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncDatabase = Depends(get_database),
):
    await student_service.delete(db, user.id, student_id)
    return DeleteResponse(id=student_id)
