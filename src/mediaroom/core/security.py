"""Session token helpers for the identity boundary.

The identity provider hands the core a Bearer JWT whose ``sub`` claim is the
stable numeric user id. These helpers encode and decode such tokens.
"""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt

from mediaroom.core.errors import UnauthorizedError
from mediaroom.core.settings import settings
from mediaroom.db.time import utcnow


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Return a signed access token for ``user_id``."""
    expire = utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``.

    Raises:
        UnauthorizedError: If the token is malformed, expired, or has no subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise UnauthorizedError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise UnauthorizedError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise UnauthorizedError("Could not validate credentials") from err
