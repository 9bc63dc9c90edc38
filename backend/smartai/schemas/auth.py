from typing import Optional

from pydantic import BaseModel


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class LogoutResponse(BaseModel):
    message: str = "Logged out"
