"""
Authentication utilities for JWT tokens and password hashing.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .database import get_db
from .models.user import User
from .config import get_settings
from .logging_config import auth_logger
from .responses import unauthenticated

settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""
    user_id: int
    email: str
    username: str
    expires_at: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials, or None."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        # Unknown emails take as long as wrong passwords.
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(user: User, issued_at: Optional[datetime] = None) -> str:
    """Create a signed JWT for the user, valid for token_expire_days."""
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + timedelta(days=settings.token_expire_days)
    to_encode = {
        "sub": str(user.id),  # JWT sub claim must be a string
        "email": user.email,
        "username": user.username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.algorithm)


def verify_token(token: str, now: Optional[datetime] = None) -> Optional[TokenClaims]:
    """Verify a JWT and return its claims, or None if it is forged, malformed or expired."""
    try:
        # Expiry is checked below so the clock can be supplied by the caller.
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.algorithm],
            options={"verify_exp": False},
        )
    except JWTError:
        return None

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    now = now or datetime.now(timezone.utc)
    if now.timestamp() >= exp:
        return None

    email = payload.get("email")
    username = payload.get("username")
    if not email or not username:
        return None

    try:
        user_id = int(payload.get("sub"))
    except (ValueError, TypeError):
        return None

    return TokenClaims(
        user_id=user_id,
        email=email,
        username=username,
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _user_from_token(token: str, db: Session) -> Optional[User]:
    claims = verify_token(token)
    if not claims:
        return None
    return db.query(User).filter(User.id == claims.user_id).first()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Get the current user from the bearer token (optional auth)."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        return None
    return _user_from_token(token, db)


def get_required_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Get the current user, raising 401 if the token is missing or invalid."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        unauthenticated("Authentication required")

    user = _user_from_token(token, db)
    if not user:
        auth_logger.warning("Rejected bearer token", path=request.url.path)
        unauthenticated("Invalid token")
    return user
