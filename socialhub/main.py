"""
SocialHub API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db, init_db
from .limiter import limiter
from .logging_config import api_logger, db_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .responses import register_exception_handlers, success, failure
from .routes import (
    auth_router,
    posts_router,
    comments_router,
    likes_router,
    search_router,
    users_router,
    ai_router,
)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup (schema migrations are out of scope)."""
    init_db()
    api_logger.info("SocialHub API started", environment=settings.environment)
    yield


app = FastAPI(
    title="SocialHub API",
    description="Backend API for the SocialHub social network",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
register_exception_handlers(app)

app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,
)

# Routes
app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(comments_router)
app.include_router(likes_router)
app.include_router(search_router)
app.include_router(users_router)
app.include_router(ai_router)


@app.get("/api/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for load balancers and monitoring."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        db_logger.error("Database health check failed", error=e)
        return failure(503, "Database unavailable")

    return success({
        "status": "healthy",
        "environment": settings.environment,
        "version": "1.0.0",
    })
