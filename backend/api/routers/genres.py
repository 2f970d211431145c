from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
from infra.database.connection import get_session
from api.schemas.genres import GenreRead
from app.services.genre_app_service import GenreAppService

router = APIRouter()

@router.get("/api/genres", response_model=List[GenreRead])
def get_genres(session: Session = Depends(get_session)):
    service = GenreAppService(session)
    return service.get_genres()
