"""Ownership checks shared by every service."""

import uuid

from jobhub.db import User
from jobhub.errors import AuthorizationError

Identifier = str | uuid.UUID


def same_id(a: Identifier | None, b: Identifier | None) -> bool:
    """Compare two identifiers by their canonical string form."""
    if a is None or b is None:
        return False
    return str(a) == str(b)


def is_owner(owner_id: Identifier | None, user: User) -> bool:
    return same_id(owner_id, user.id)


def ensure_owner(owner_id: Identifier | None, user: User, message: str, allow_admin: bool = False) -> None:
    """Raise AuthorizationError unless the user owns the resource."""
    if allow_admin and user.role == "admin":
        return
    if not is_owner(owner_id, user):
        raise AuthorizationError(message)
