"""
Student quiz attempt schemas.

An attempt links a student to a quiz and records where the student is:
assigned → in_progress → completed. Scores are reported by the client; this
API stores them and does not grade.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from smartai.schemas.common import DocumentResponse, ObjectIdStr

AttemptStatus = Literal["assigned", "in_progress", "completed"]


class StudentQuizCreate(BaseModel):
    student_id: ObjectIdStr
    quiz_id: ObjectIdStr
    status: AttemptStatus = "assigned"
    score: Optional[float] = Field(default=None, ge=0)
    max_score: Optional[float] = Field(default=None, gt=0)
    answers: List[Dict[str, Any]] = Field(default_factory=list)
    due_at: Optional[datetime] = None

    @model_validator(mode="after")
    def score_within_max(self):
        if self.score is not None and self.max_score is not None and self.score > self.max_score:
            raise ValueError("score cannot exceed max_score")
        return self


class StudentQuizUpdate(BaseModel):
    status: Optional[AttemptStatus] = None
    score: Optional[float] = Field(default=None, ge=0)
    max_score: Optional[float] = Field(default=None, gt=0)
    answers: Optional[List[Dict[str, Any]]] = None
    due_at: Optional[datetime] = None

    @model_validator(mode="after")
    def score_within_max(self):
        if self.score is not None and self.max_score is not None and self.score > self.max_score:
            raise ValueError("score cannot exceed max_score")
        return self


class StudentQuizResponse(DocumentResponse):
    student_id: str
    quiz_id: str
    status: AttemptStatus
    score: Optional[float] = None
    max_score: Optional[float] = None
    answers: List[Dict[str, Any]] = Field(default_factory=list)
    due_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
