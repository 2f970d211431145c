from typing import List, Optional
from sqlmodel import Session, select
from domain.models.genre import Genre

class GenreRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[Genre]:
        return self.session.exec(select(Genre).order_by(Genre.id)).all()

    def get_by_id(self, genre_id: int) -> Optional[Genre]:
        return self.session.get(Genre, genre_id)
