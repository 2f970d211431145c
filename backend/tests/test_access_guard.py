import pytest
from models import RapEntry
from domain.exceptions import AuthorizationError
from domain.services import access_guard

def _rap(user_id=1, is_public=True):
    return RapEntry(id=10, user_id=user_id, genre_id=1, topic="t", stanza_count=8, content="c", is_public=is_public)

@pytest.mark.parametrize("is_public,user_id,expected", [
    (True, None, True),
    (True, 2, True),
    (True, 1, True),
    (False, None, False),
    (False, 2, False),
    (False, 1, True),
])
def test_can_read(is_public, user_id, expected):
    assert access_guard.can_read(_rap(is_public=is_public), user_id) is expected

@pytest.mark.parametrize("user_id,expected", [(1, True), (2, False), (None, False)])
def test_can_write_is_owner_only(user_id, expected):
    assert access_guard.can_write(_rap(is_public=True), user_id) is expected

def test_ensure_readable_denies_private():
    with pytest.raises(AuthorizationError) as exc:
        access_guard.ensure_readable(_rap(is_public=False), 2)
    assert exc.value.status_code == 403
    assert exc.value.message == "Access denied"

def test_ensure_writable_message_names_action():
    with pytest.raises(AuthorizationError) as exc:
        access_guard.ensure_writable(_rap(), 2, action="delete")
    assert exc.value.message == "You can only delete your own raps"

    access_guard.ensure_writable(_rap(), 1)
