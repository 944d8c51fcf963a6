"""
Authentication Routes

GET /auth - Get current user info (no password)
POST /auth - Login and get token
"""

from fastapi import APIRouter, Depends

from devconnect.core.auth import get_current_user
from devconnect.services.user_service import UserService, get_user_service
from devconnect.schemas.schemas import LoginRequest, TokenResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("", response_model=UserResponse)
async def get_me(
    user: dict = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """Get current authenticated user's info."""
    return users.get_self(user["id"])


@router.post("", response_model=TokenResponse)
async def login(request: LoginRequest, users: UserService = Depends(get_user_service)):
    """
    Login and receive a token.

    Include token in requests: x-auth-token: <token>
    """
    token = users.authenticate(request.email, request.password)
    return TokenResponse(token=token)
