from typing import Optional

from pydantic import BaseModel, Field

from smartai.schemas.common import DocumentResponse, ObjectIdStr


class BookmarkCreate(BaseModel):
    quiz_id: ObjectIdStr
    note: Optional[str] = Field(default=None, max_length=500)


class BookmarkResponse(DocumentResponse):
    quiz_id: str
    note: Optional[str] = None
