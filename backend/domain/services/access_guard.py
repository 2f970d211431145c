"""Read/write eligibility rules for saved raps.

Public raps are readable by anyone, private raps only by their owner.
Writes (update, delete) are owner-only. Denials are AuthorizationError
(403), so a private rap's existence is not hidden, only its content.
Likes are not owner-gated and do not go through this module.
"""

from typing import Optional
from domain.models.rap import RapEntry
from domain.exceptions import AuthorizationError


def is_owner(rap: RapEntry, user_id: Optional[int]) -> bool:
    return user_id is not None and rap.user_id == user_id


def can_read(rap: RapEntry, user_id: Optional[int]) -> bool:
    return bool(rap.is_public) or is_owner(rap, user_id)


def can_write(rap: RapEntry, user_id: Optional[int]) -> bool:
    return is_owner(rap, user_id)


def ensure_readable(rap: RapEntry, user_id: Optional[int]) -> None:
    if not can_read(rap, user_id):
        raise AuthorizationError("Access denied")


def ensure_writable(rap: RapEntry, user_id: Optional[int], action: str = "update") -> None:
    if not can_write(rap, user_id):
        raise AuthorizationError(f"You can only {action} your own raps")
