"""
DevConnect API - Main Application

FastAPI backend with:
- MongoDB for users, profiles and posts
- JWT authentication via the x-auth-token header
- bcrypt password hashing

Run: uvicorn devconnect.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from devconnect.api.routes import api_router
from devconnect.core.config import get_settings
from devconnect.core.errors import register_exception_handlers
from devconnect.core.logging import configure_logging
from devconnect.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize MongoDB indexes on startup."""
    logger.info("Starting DevConnect API", mongodb_db=settings.mongodb_db)
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed", error=str(e))
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="DevConnect API",
        description="""
        Social network backend for developers.

        ## Features
        - **Users**: Registration with gravatar avatars
        - **Authentication**: Token login, token sent in the `x-auth-token` header
        - **Profiles**: Bio, skills, social links, experience and education
        - **Posts**: Posts with likes and comments
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["Health"], response_class=PlainTextResponse)
    async def root():
        return "API Running."

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "mongodb": "connected" if test_mongo_connection() else "disconnected",
        }

    return app


app = create_app()
