from sqlmodel import Session

from domain.models.user import User
from domain.exceptions import AuthenticationError, ValidationError
from infra.repositories.user_repository import UserRepository
from api.schemas.auth import SignUpRequest, SignInRequest, GoogleAuthRequest
from utils.security import hash_password, verify_password, avatar_url_for
from utils.logger import get_logger

logger = get_logger(__name__)

class AuthAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = UserRepository(session)

    def sign_up(self, data: SignUpRequest) -> User:
        if self.repository.get_by_email(data.email):
            raise ValidationError("Email already in use", errors=[{"field": "email", "message": "Email already in use"}])
        if self.repository.get_by_username(data.username):
            raise ValidationError("Username already taken", errors=[{"field": "username", "message": "Username already taken"}])

        user = User(
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            avatar_url=avatar_url_for(data.username),
            google_id=None,
        )
        user = self.repository.create(user)
        logger.info(f"User {user.id} signed up")
        return user

    def sign_in(self, data: SignInRequest) -> User:
        user = self.repository.get_by_email(data.email)
        if not user:
            raise AuthenticationError("Incorrect email or password")

        # Accounts created through Google have no password
        if not user.password:
            raise AuthenticationError("Please log in with Google")

        if not verify_password(data.password, user.password):
            raise AuthenticationError("Incorrect email or password")

        logger.info(f"User {user.id} signed in")
        return user

    def resolve_or_create_google_user(self, data: GoogleAuthRequest) -> User:
        """
        Match by Google id, then by email, else create a password-less user.
        Calling it again with the same payload returns the same user.
        """
        user = self.repository.get_by_google_id(data.google_id)
        if user:
            return user

        user = self.repository.get_by_email(data.email)
        if user:
            return user

        user = User(
            username=self._available_username(data.name),
            email=data.email,
            password=None,
            google_id=data.google_id,
            avatar_url=avatar_url_for(data.name),
        )
        user = self.repository.create(user)
        logger.info(f"User {user.id} created from Google sign-in")
        return user

    def _available_username(self, base: str) -> str:
        candidate = base
        suffix = 1
        while self.repository.get_by_username(candidate):
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate

    def delete_user(self, user_id: int) -> bool:
        """Administrative removal. Cascades to the user's raps and all related likes."""
        user = self.repository.get_by_id(user_id)
        if not user:
            return False
        self.repository.delete(user)
        logger.info(f"User {user_id} deleted with their raps and likes")
        return True
