from typing import List, Optional, Dict, Any
from sqlmodel import Session

from domain.models.rap import RapEntry, RapLike
from domain.services import access_guard
from domain.exceptions import AuthenticationError, NotFoundError, ValidationError
from infra.repositories.rap_repository import RapRepository
from infra.repositories.like_repository import LikeRepository
from infra.repositories.genre_repository import GenreRepository
from api.schemas.rap import RapCreate, RapUpdate
from utils.logger import get_logger

logger = get_logger(__name__)

class RapAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = RapRepository(session)
        self.like_repository = LikeRepository(session)
        self.genre_repository = GenreRepository(session)

    def _get_or_404(self, rap_id: int) -> RapEntry:
        rap = self.repository.get_by_id(rap_id)
        if not rap:
            raise NotFoundError("Rap not found")
        return rap

    def _ensure_genre(self, genre_id: int):
        if not self.genre_repository.get_by_id(genre_id):
            raise ValidationError(
                "Unknown genre",
                errors=[{"field": "genreId", "message": f"Genre {genre_id} does not exist"}],
            )

    def create_rap(self, user_id: Optional[int], data: RapCreate) -> RapEntry:
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        self._ensure_genre(data.genre_id)

        rap = RapEntry(
            user_id=user_id,
            genre_id=data.genre_id,
            topic=data.topic,
            stanza_count=data.stanza_count,
            explicit=data.explicit,
            content=data.content,
            is_public=data.is_public,
        )
        saved = self.repository.create(rap)
        logger.info(f"Rap {saved.id} saved by user {user_id} (public={saved.is_public})")
        return saved

    def get_rap(self, rap_id: int, user_id: Optional[int]) -> RapEntry:
        rap = self._get_or_404(rap_id)
        access_guard.ensure_readable(rap, user_id)
        return rap

    def get_user_raps(self, user_id: int) -> List[RapEntry]:
        return self.repository.find_by_user(user_id)

    def get_public_raps(self) -> List[RapEntry]:
        return self.repository.find_public()

    def search_raps(self, query: str) -> List[RapEntry]:
        return self.repository.search_public(query)

    def update_rap(self, rap_id: int, user_id: Optional[int], data: RapUpdate) -> RapEntry:
        rap = self._get_or_404(rap_id)
        access_guard.ensure_writable(rap, user_id, action="update")

        # Partial merge; null values leave the stored field untouched
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "genre_id" in update_data:
            self._ensure_genre(update_data["genre_id"])
        for key, value in update_data.items():
            setattr(rap, key, value)

        return self.repository.update(rap)

    def delete_rap(self, rap_id: int, user_id: Optional[int]) -> bool:
        rap = self._get_or_404(rap_id)
        access_guard.ensure_writable(rap, user_id, action="delete")
        self.repository.delete(rap)
        logger.info(f"Rap {rap_id} deleted by user {user_id}")
        return True

    def like_rap(self, rap_id: int, user_id: int) -> Dict[str, Any]:
        self._get_or_404(rap_id)
        like = self.like_repository.add(user_id, rap_id)
        return {"like": like, "count": self.like_repository.count_for_rap(rap_id)}

    def unlike_rap(self, rap_id: int, user_id: int) -> Dict[str, int]:
        self.like_repository.remove(user_id, rap_id)
        return {"count": self.like_repository.count_for_rap(rap_id)}

    def get_like_count(self, rap_id: int) -> Dict[str, int]:
        return {"count": self.like_repository.count_for_rap(rap_id)}

    def get_user_likes(self, user_id: int) -> List[RapLike]:
        return self.like_repository.find_by_user(user_id)
