from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

class SignUpRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)

class SignInRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)

class GoogleAuthRequest(CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    name: str = Field(min_length=1)
    google_id: str = Field(min_length=1)

class UserRead(CamelModel):
    id: int
    username: str
    email: str
    avatar_url: Optional[str] = None
    google_id: Optional[str] = None
    created_at: datetime

class SessionUser(BaseModel):
    id: int
    username: str
    email: str
