"""
Quiz schemas.

Questions are stored as opaque dicts: the frontend owns their structure
(question text, options, answer, explanation...). The API only checks that
each one is an object.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from smartai.schemas.common import DocumentResponse, ObjectIdStr


class QuizCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    folder_id: Optional[ObjectIdStr] = Field(default=None, description="Folder to file the quiz under")
    tags: List[str] = Field(default_factory=list, max_length=50)
    questions: List[Dict[str, Any]] = Field(default_factory=list)


class QuizUpdate(BaseModel):
    """Partial update; only fields present in the body are changed."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    folder_id: Optional[ObjectIdStr] = None
    tags: Optional[List[str]] = Field(default=None, max_length=50)
    questions: Optional[List[Dict[str, Any]]] = None


class QuizResponse(DocumentResponse):
    title: str
    description: Optional[str] = None
    folder_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    questions: List[Dict[str, Any]] = Field(default_factory=list)
    question_count: int = 0
