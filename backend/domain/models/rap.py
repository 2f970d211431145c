from typing import Optional
from datetime import datetime
from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel, UniqueConstraint

class RapEntry(SQLModel, table=True):
    __tablename__ = "rap_entries"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id")
    genre_id: int = Field(foreign_key="genres.id")
    topic: str
    stanza_count: int
    explicit: bool = Field(default=False)
    content: str
    is_public: bool = Field(default=True)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, sa_type=DateTime)

class RapLike(SQLModel, table=True):
    __tablename__ = "rap_likes"
    __table_args__ = (UniqueConstraint("user_id", "rap_id"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id")
    rap_id: int = Field(foreign_key="rap_entries.id")
    created_at: NaiveDatetime = Field(default_factory=datetime.now, sa_type=DateTime)
