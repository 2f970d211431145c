from typing import Optional
from fastapi import Depends, Request
from sqlmodel import Session
from infra.database.connection import get_session
from infra.repositories.user_repository import UserRepository
from domain.models.user import User
from domain.exceptions import AuthenticationError
from api.schemas.auth import SessionUser

SESSION_USER_KEY = "user"

def login_session(request: Request, user: User):
    request.session[SESSION_USER_KEY] = SessionUser.model_validate(user, from_attributes=True).model_dump()

def logout_session(request: Request):
    request.session.clear()

def get_current_user(request: Request, session: Session = Depends(get_session)) -> Optional[User]:
    """Session user, or None. A session pointing at a deleted user is cleared."""
    data = request.session.get(SESSION_USER_KEY)
    if not data or "id" not in data:
        return None
    user = UserRepository(session).get_by_id(data["id"])
    if not user:
        request.session.clear()
        return None
    return user

def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if user is None:
        raise AuthenticationError("Unauthorized")
    return user
