from typing import List
from sqlmodel import Session
from domain.models.genre import Genre
from infra.repositories.genre_repository import GenreRepository

class GenreAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = GenreRepository(session)

    def get_genres(self) -> List[Genre]:
        return self.repository.find_all()
