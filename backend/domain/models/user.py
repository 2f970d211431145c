from typing import Optional
from datetime import datetime
from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

# created_at is local wall-clock time, stored in TIMESTAMP (no zone) columns
class User(SQLModel, table=True):
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True)
    email: str = Field(unique=True)
    # None for accounts created through Google sign-in
    password: Optional[str] = Field(default=None)
    avatar_url: Optional[str] = None
    google_id: Optional[str] = Field(default=None, unique=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, sa_type=DateTime)
