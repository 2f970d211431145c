from typing import Optional
from datetime import datetime
from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

class Genre(SQLModel, table=True):
    __tablename__ = "genres"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    icon: Optional[str] = None
    created_at: NaiveDatetime = Field(default_factory=datetime.now, sa_type=DateTime)
