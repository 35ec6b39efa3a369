"""
Authentication routes for register, login and the current session.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.auth import RegisterRequest, LoginRequest, UserResponse, AuthResponse
from ..auth import (
    authenticate_user,
    get_password_hash,
    create_access_token,
    get_required_user,
)
from ..config import get_settings
from ..limiter import limiter
from ..logging_config import auth_logger
from ..responses import success, created, conflict, unauthenticated

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


def auth_payload(user: User) -> dict:
    """User summary plus a freshly issued token."""
    payload = AuthResponse(
        user=UserResponse.model_validate(user),
        token=create_access_token(user),
    )
    return payload.model_dump(mode="json")


@router.post("/register")
@limiter.limit(settings.register_rate_limit)
def register(request: Request, user_data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user account and log it in."""
    user = User(
        email=user_data.email,
        username=user_data.username,
        display_name=user_data.display_name,
        bio=user_data.bio,
        hashed_password=get_password_hash(user_data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        conflict("User with this email or username already exists")
    db.refresh(user)

    auth_logger.info("User registered", user_id=user.id, username=user.username)
    return created(auth_payload(user), "User registered successfully")


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
def login(request: Request, credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        auth_logger.warning("Failed login", email=credentials.email)
        unauthenticated("Invalid credentials")

    return success(auth_payload(user), "Login successful")


@router.get("/me")
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return success(UserResponse.model_validate(current_user).model_dump(mode="json"))


@router.post("/logout")
def logout(current_user: User = Depends(get_required_user)):
    """
    Logout the current user.

    Tokens are stateless and stay valid until they expire; the client
    discards its copy.
    """
    return success(message="Successfully logged out")
