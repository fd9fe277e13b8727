"""API router -- aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from anihub.api.routes import anime, auth, discussions, health, platforms, tracker

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(anime.router, prefix="/anime", tags=["anime"])
api_router.include_router(tracker.router, prefix="/tracker", tags=["tracker"])
api_router.include_router(discussions.router, prefix="/discussions", tags=["discussions"])
api_router.include_router(platforms.router, prefix="/platforms", tags=["platforms"])
