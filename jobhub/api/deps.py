"""Authentication and role dependencies for protected routes."""

from collections.abc import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobhub.db import User, get_db
from jobhub.errors import AuthenticationError, AuthorizationError
from jobhub.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token into the calling user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise AuthenticationError("Not authorized, user not found")
    return user


def require_roles(*roles: str) -> Callable[..., User]:
    """Dependency factory allowing only callers whose role is in ``roles``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise AuthorizationError(f"Role '{user.role}' is not allowed to access this resource")
        return user

    return dependency
