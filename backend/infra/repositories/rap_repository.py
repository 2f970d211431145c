from typing import List, Optional
from sqlmodel import Session, select, delete, or_
from domain.models.rap import RapEntry, RapLike

def _escape_like(value: str) -> str:
    return value.replace("!", "!!").replace("%", "!%").replace("_", "!_")

class RapRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, rap_id: int) -> Optional[RapEntry]:
        return self.session.get(RapEntry, rap_id)

    def find_by_user(self, user_id: int) -> List[RapEntry]:
        statement = (
            select(RapEntry)
            .where(RapEntry.user_id == user_id)
            .order_by(RapEntry.created_at.desc(), RapEntry.id.desc())
        )
        return self.session.exec(statement).all()

    def find_public(self) -> List[RapEntry]:
        statement = (
            select(RapEntry)
            .where(RapEntry.is_public == True)
            .order_by(RapEntry.created_at.desc(), RapEntry.id.desc())
        )
        return self.session.exec(statement).all()

    def search_public(self, query: str) -> List[RapEntry]:
        pattern = f"%{_escape_like(query)}%"
        statement = (
            select(RapEntry)
            .where(RapEntry.is_public == True)
            .where(or_(
                RapEntry.topic.ilike(pattern, escape="!"),
                RapEntry.content.ilike(pattern, escape="!"),
            ))
            .order_by(RapEntry.created_at.desc(), RapEntry.id.desc())
        )
        return self.session.exec(statement).all()

    def create(self, rap: RapEntry) -> RapEntry:
        self.session.add(rap)
        self.session.commit()
        self.session.refresh(rap)
        return rap

    def update(self, rap: RapEntry) -> RapEntry:
        self.session.add(rap)
        self.session.commit()
        self.session.refresh(rap)
        return rap

    def delete(self, rap: RapEntry):
        # Likes go with the entry
        self.session.exec(delete(RapLike).where(RapLike.rap_id == rap.id))
        self.session.delete(rap)
        self.session.commit()
