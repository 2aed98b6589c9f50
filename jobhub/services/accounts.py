"""Registration, login and profile updates."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobhub.config import settings
from jobhub.db import User
from jobhub.errors import AuthenticationError, AuthorizationError, ConflictError
from jobhub.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register(db: Session, name: str, email: str, password: str, role: str = "jobseeker") -> tuple[User, str]:
    """Create an account and issue its first token."""
    if role == "admin" and not settings.allow_admin_registration:
        raise AuthorizationError("Admin accounts cannot be self-registered")

    if find_by_email(db, email):
        raise ConflictError("User already exists")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists with this email")
    db.refresh(user)

    logger.info(f"Registered user {user.id} with role {user.role}")
    return user, create_access_token(user.id)


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a token."""
    user = find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    if not user.is_active:
        raise AuthenticationError("Account is disabled")

    user.last_login = datetime.now(UTC)
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} logged in")
    return user, create_access_token(user.id)


def update_profile(db: Session, user: User, changes: dict) -> User:
    """Apply the supplied profile fields; omitted fields are left untouched."""

    if "email" in changes:
        email = normalize_email(changes["email"])
        if email != user.email:
            existing = find_by_email(db, email)
            if existing is not None and existing.id != user.id:
                raise ConflictError("Email already exists")
        user.email = email
    if "name" in changes:
        user.name = changes["name"]
    if "bio" in changes:
        user.bio = changes["bio"]
    if "password" in changes:
        user.password_hash = hash_password(changes["password"])

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(user)

    logger.info(f"Updated profile of user {user.id}: {sorted(changes)}")
    return user
