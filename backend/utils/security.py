from urllib.parse import quote
import bcrypt
from config import settings
from domain.constants import AVATAR_URL_TEMPLATE

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False

def avatar_url_for(seed: str) -> str:
    return AVATAR_URL_TEMPLATE.format(seed=quote(seed))
