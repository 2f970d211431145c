from typing import Optional
from datetime import datetime
from .common import CamelModel

class GenreRead(CamelModel):
    id: int
    name: str
    icon: Optional[str] = None
    created_at: datetime
