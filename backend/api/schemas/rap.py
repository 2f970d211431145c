from pydantic import Field
from typing import Optional
from datetime import datetime
from domain.constants import TOPIC_MAX_LENGTH, MIN_STANZA_COUNT, MAX_STANZA_COUNT
from .common import CamelModel

class RapGenerateRequest(CamelModel):
    # Numbers and booleans must arrive as JSON numbers and booleans, not strings
    genre: str = Field(min_length=1)
    topic: str = Field(min_length=1, max_length=TOPIC_MAX_LENGTH)
    stanza_count: int = Field(strict=True, ge=MIN_STANZA_COUNT, le=MAX_STANZA_COUNT)
    explicit: bool = Field(default=False, strict=True)

class RapGenerateResponse(CamelModel):
    content: str

class RapCreate(CamelModel):
    # Any client-supplied userId is ignored; the owner comes from the session
    genre_id: int = Field(strict=True)
    topic: str = Field(min_length=1, max_length=TOPIC_MAX_LENGTH)
    stanza_count: int = Field(strict=True, ge=MIN_STANZA_COUNT, le=MAX_STANZA_COUNT)
    explicit: bool = Field(default=False, strict=True)
    content: str = Field(min_length=1)
    is_public: bool = Field(default=True, strict=True)

class RapUpdate(CamelModel):
    genre_id: Optional[int] = Field(default=None, strict=True)
    topic: Optional[str] = Field(default=None, min_length=1, max_length=TOPIC_MAX_LENGTH)
    stanza_count: Optional[int] = Field(default=None, strict=True, ge=MIN_STANZA_COUNT, le=MAX_STANZA_COUNT)
    explicit: Optional[bool] = Field(default=None, strict=True)
    content: Optional[str] = Field(default=None, min_length=1)
    is_public: Optional[bool] = Field(default=None, strict=True)

class RapRead(CamelModel):
    id: int
    user_id: int
    genre_id: int
    topic: str
    stanza_count: int
    explicit: bool
    content: str
    is_public: bool
    created_at: datetime

class LikeRead(CamelModel):
    id: int
    user_id: int
    rap_id: int
    created_at: datetime

class LikeResponse(CamelModel):
    like: LikeRead
    count: int
