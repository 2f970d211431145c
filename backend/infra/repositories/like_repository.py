from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import DBAPIError
from sqlmodel import Session, select
from domain.models.rap import RapLike
from utils.logger import get_logger

logger = get_logger(__name__)

class LikeRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int, rap_id: int) -> Optional[RapLike]:
        statement = select(RapLike).where(RapLike.user_id == user_id, RapLike.rap_id == rap_id)
        return self.session.exec(statement).first()

    def add(self, user_id: int, rap_id: int) -> RapLike:
        """
        Insert a like, or return the row that already exists for (user, rap).
        The UNIQUE (user_id, rap_id) constraint settles concurrent inserts.
        """
        existing = self.get(user_id, rap_id)
        if existing:
            return existing

        like = RapLike(user_id=user_id, rap_id=rap_id)
        try:
            self.session.add(like)
            self.session.commit()
            self.session.refresh(like)
            return like
        except DBAPIError as e:
            self.session.rollback()
            existing = self.get(user_id, rap_id)
            if existing:
                logger.info(f"Like ({user_id}, {rap_id}) inserted concurrently, returning existing row")
                return existing
            raise e

    def remove(self, user_id: int, rap_id: int) -> bool:
        like = self.get(user_id, rap_id)
        if not like:
            return False
        self.session.delete(like)
        self.session.commit()
        return True

    def count_for_rap(self, rap_id: int) -> int:
        statement = select(func.count()).select_from(RapLike).where(RapLike.rap_id == rap_id)
        return int(self.session.exec(statement).one())

    def find_by_user(self, user_id: int) -> List[RapLike]:
        statement = select(RapLike).where(RapLike.user_id == user_id).order_by(RapLike.created_at.desc())
        return self.session.exec(statement).all()
