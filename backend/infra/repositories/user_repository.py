from typing import Optional
from sqlmodel import Session, select, delete
from domain.models.user import User
from domain.models.rap import RapEntry, RapLike

class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def get_by_google_id(self, google_id: str) -> Optional[User]:
        if not google_id:
            return None
        return self.session.exec(select(User).where(User.google_id == google_id)).first()

    def create(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user: User):
        """Remove the user with their entries, likes on those entries and likes they made."""
        rap_ids = self.session.exec(select(RapEntry.id).where(RapEntry.user_id == user.id)).all()
        if rap_ids:
            self.session.exec(delete(RapLike).where(RapLike.rap_id.in_(rap_ids)))
        self.session.exec(delete(RapLike).where(RapLike.user_id == user.id))
        self.session.exec(delete(RapEntry).where(RapEntry.user_id == user.id))
        self.session.delete(user)
        self.session.commit()
