"""Registration, login and profile endpoints."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobhub.api.deps import get_current_user
from jobhub.api.limiter import limiter
from jobhub.api.schemas import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserResponse
from jobhub.config import settings
from jobhub.db import User, get_db
from jobhub.services import accounts

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
def register(
    request: Request,
    data: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Create an account and return it with a bearer token."""
    user, token = accounts.register(db, data.name, data.email, data.password, role=data.role)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.auth_rate_limit)
def login(
    request: Request,
    data: LoginRequest,
    db: Session = Depends(get_db),
):
    """Exchange email and password for a bearer token."""
    user, token = accounts.login(db, data.email, data.password)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    """Get the calling user."""
    return UserResponse.model_validate(user)


@router.put("/profile", response_model=UserResponse)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the caller's name, email, bio or password."""
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    return UserResponse.model_validate(accounts.update_profile(db, user, changes))
