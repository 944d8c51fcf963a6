"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from devconnect.api.routes.user_routes import router as user_router
from devconnect.api.routes.auth_routes import router as auth_router
from devconnect.api.routes.profile_routes import router as profile_router
from devconnect.api.routes.post_routes import router as post_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(user_router)
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(post_router)
