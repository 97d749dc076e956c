"""
API Router - Aggregates all endpoints.
Routes are mounted at the root path.
"""

from fastapi import APIRouter

from asset_api.api import assets, health, users

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
api_router.include_router(users.router, tags=["users"])
