"""
SmartAI Backend - Shared Request/Response Schemas
=================================================

Pieces every resource schema builds on: the ObjectId reference type, the
stored-document base, the paginated list wrapper, and the error/health/root
bodies used outside the resource routers.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, Field

T = TypeVar("T")


def _check_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError(f"'{value}' is not a valid id")
    return value


# 24-character hex reference to another document
ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


class DocumentResponse(BaseModel):
    """Fields every stored document exposes."""
    id: str = Field(description="Document id (ObjectId hex)")
    owner_id: str = Field(description="Owner (token subject)")
    created_at: datetime
    updated_at: datetime


class Page(BaseModel, Generic[T]):
    """
    Offset-paginated list.

    total_count is also sent as the X-Total-Count header so tables can show
    "1-50 of 312" without parsing the body.
    """
    items: List[T]
    total_count: int = Field(description="Documents matching the filters")
    skip: int
    limit: int


class DeleteResponse(BaseModel):
    id: str
    deleted: bool = True


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None)
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(default="OK")


class RootResponse(BaseModel):
    message: str
    version: str
    endpoints: List[str]
    timestamp: datetime


class EmailCheckResponse(BaseModel):
    ok: bool
    error: Optional[str] = None
