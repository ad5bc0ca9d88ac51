"""
API Router - Combines all route modules.
"""
from fastapi import APIRouter

from .routes import directory, essays, health, roadmap, users

# Main API router
api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(essays.router)
api_router.include_router(roadmap.router)
api_router.include_router(directory.router)
api_router.include_router(users.router)
