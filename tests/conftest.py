"""
Pytest configuration and fixtures for SocialHub API tests.
"""
import os

# Settings are read once at import time, so the environment must be in place first.
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from socialhub.database import Base, get_db
from socialhub.limiter import limiter
from socialhub.main import app
from socialhub.models import Post, User
from socialhub.auth import get_password_hash, create_access_token
from socialhub.hashtags import extract_hashtags, serialize_hashtags

# Disable rate limiting for tests
limiter.enabled = False

# In-memory SQLite shared by every session through a single connection
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "testpassword123"


def get_test_db():
    """Give each request its own session on the shared test database."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = get_test_db

    session = TestingSessionLocal()
    yield session

    app.dependency_overrides.clear()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def make_user(db):
    """Factory for users stored directly in the database."""
    def _make_user(username: str, password: str = DEFAULT_PASSWORD, display_name: str = None) -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            display_name=display_name or username.title(),
            hashed_password=get_password_hash(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture(scope="function")
def make_post(db):
    """Factory for posts stored directly in the database."""
    def _make_post(author: User, content: str) -> Post:
        hashtags = extract_hashtags(content)
        post = Post(
            author_id=author.id,
            content=content,
            hashtags=serialize_hashtags(hashtags) if hashtags else None,
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make_post


@pytest.fixture(scope="function")
def test_user(make_user):
    return make_user("alice", display_name="Alice Liddell")


@pytest.fixture(scope="function")
def other_user(make_user):
    return make_user("bob", display_name="Bob Builder")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Auth headers for the test user."""
    return bearer(test_user)


@pytest.fixture(scope="function")
def other_headers(other_user):
    """Auth headers for the second user."""
    return bearer(other_user)


@pytest.fixture(scope="function")
def headers_for():
    """Build auth headers for any user."""
    return bearer
