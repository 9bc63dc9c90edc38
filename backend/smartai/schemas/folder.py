from typing import Optional

from pydantic import BaseModel, Field

from smartai.schemas.common import DocumentResponse


class FolderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100, description="Unique per owner")
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")


class FolderUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")


class FolderResponse(DocumentResponse):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    quiz_count: Optional[int] = Field(default=None, description="Only set on single-folder reads")
