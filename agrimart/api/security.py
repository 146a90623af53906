# agrimart/api/security.py
from datetime import datetime, timedelta, timezone

import jwt

from agrimart.domain.entities import CurrentUser
from agrimart.domain.enums import UserRole
from agrimart.utils.settings import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_TTL_SECONDS


class InvalidToken(Exception):
    pass


def create_access_token(user_id: int, role: UserRole | str, ttl: int = ACCESS_TOKEN_TTL_SECONDS) -> str:
    """Mints an access token in the format the login service issues ({sub, role})."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": UserRole(role).value,
        "iat": now,
        "exp": now + timedelta(seconds=ttl),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidToken("Invalid token") from e

    try:
        return CurrentUser(id=int(payload["sub"]), role=UserRole(payload.get("role", UserRole.BUYER)))
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidToken("Invalid token payload") from e
