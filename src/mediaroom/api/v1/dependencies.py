"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mediaroom.core.errors import ForbiddenError, UnauthorizedError
from mediaroom.core.security import decode_access_token
from mediaroom.db.session import get_db
from mediaroom.models import User
from mediaroom.repositories.user_repo import UserRepository

# Missing credentials are reported through UnauthorizedError, not FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _resolve_user(credentials: HTTPAuthorizationCredentials, db: Session) -> User:
    user_id = decode_access_token(credentials.credentials)
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Return the authenticated user.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names no user.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    return _resolve_user(credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Return the authenticated user, or None for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _resolve_user(credentials, db)


def ensure_same_user(current_user: User, claimed_user_id: int | None) -> None:
    """Reject an explicit user id that does not belong to the caller."""
    if claimed_user_id is not None and claimed_user_id != current_user.id:
        raise ForbiddenError("Cannot act on behalf of another user")


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
