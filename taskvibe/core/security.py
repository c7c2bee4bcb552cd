from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from taskvibe.core.config import settings
from taskvibe.core.exceptions import AuthenticationException

ALGORITHM = settings.JWT_ALGORITHM


def create_access_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed bearer token for the given user id."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by a token, or raise AuthenticationException."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationException("Could not validate credentials")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationException("Could not validate credentials")
    return subject
