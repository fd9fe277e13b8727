"""AniHub Backend -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from anihub.api.router import api_router
from anihub.config import settings
from anihub.core.handlers import register_exception_handlers
from anihub.db.session import engine
from anihub.models import Base
from anihub.services.cache_service import get_cache_service
from anihub.services.catalog_service import close_catalog_client

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting AniHub API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables verified/created")
    except Exception as e:
        logger.error(f"Database init failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down AniHub API server...")

    await close_catalog_client()

    try:
        await get_cache_service().close()
        logger.info("Redis cache connection closed")
    except Exception as e:
        logger.warning(f"Error closing cache: {e}")

    await engine.dispose()


app = FastAPI(
    title="AniHub API",
    description="Anime tracking and community discussion API",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "AniHub API",
        "version": "1.0.0",
        "docs": "/docs" if settings.DEBUG else None,
        "health": "/api/health",
    }
