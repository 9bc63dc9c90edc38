from typing import Optional

from pydantic import BaseModel, Field, field_validator

from smartai.schemas.common import DocumentResponse

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class StudentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254, description="Unique per owner")
    roll_number: Optional[str] = Field(default=None, max_length=50)
    class_name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN, max_length=254)
    roll_number: Optional[str] = Field(default=None, max_length=50)
    class_name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v


class StudentResponse(DocumentResponse):
    name: str
    email: str
    roll_number: Optional[str] = None
    class_name: Optional[str] = None
