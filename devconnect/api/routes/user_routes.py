"""
User Routes

POST /users - Register new user and get token
"""

from fastapi import APIRouter, Depends

from devconnect.services.user_service import UserService, get_user_service
from devconnect.schemas.schemas import RegisterRequest, TokenResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=TokenResponse)
async def register(request: RegisterRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new user account.

    The response token is already valid; no separate login is needed.
    """
    token = users.register(request.name, request.email, request.password)
    return TokenResponse(token=token)
