"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- TokenService: JWT issue/verify with an injected signing secret
- FastAPI dependency that guards protected routes via the x-auth-token header
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import APIKeyHeader

from devconnect.core.config import get_settings
from devconnect.core.errors import InvalidTokenError, UnauthenticatedError

TOKEN_HEADER = "x-auth-token"

NO_TOKEN_MESSAGE = "No token received, authorization is denied."
INVALID_TOKEN_MESSAGE = "Token is invalid."

# Raw token header extractor (no "Bearer " prefix)
token_header_scheme = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


@lru_cache()
def get_password_context() -> CryptContext:
    """Bcrypt context with the configured cost factor."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=get_settings().bcrypt_rounds,
    )


def hash_password(password: str) -> str:
    """Hash password with bcrypt (salt is generated per hash)."""
    return get_password_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return get_password_context().verify(plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies signed tokens carrying {"user": {"id": ...}}.

    Tokens are stateless: a token is valid while its signature checks out
    and the current time is before its expiry.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: int = 360000):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = timedelta(seconds=expires_in)

    def issue(self, user_id: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for a user id."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "user": {"id": str(user_id)},
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_in).timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id embedded in a token, or raise InvalidTokenError."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidTokenError()

        # jose accepts exp == now; a token is only valid strictly before exp
        exp = payload.get("exp")
        if not isinstance(exp, int) or exp <= int(datetime.now(timezone.utc).timestamp()):
            raise InvalidTokenError()

        user = payload.get("user")
        if not isinstance(user, dict) or not user.get("id"):
            raise InvalidTokenError()
        return str(user["id"])


@lru_cache()
def get_token_service() -> TokenService:
    """Process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.jwt_expire_seconds,
    )


async def get_current_user(
    token: Optional[str] = Depends(token_header_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    FastAPI dependency - Get the identity claimed by the request token.

    The claim is trusted as-is; the user record is not looked up here.

    Usage:
        @router.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user["id"]
    """
    if not token:
        raise UnauthenticatedError(NO_TOKEN_MESSAGE)

    try:
        user_id = tokens.verify(token)
    except InvalidTokenError:
        raise UnauthenticatedError(INVALID_TOKEN_MESSAGE)

    return {"id": user_id}
