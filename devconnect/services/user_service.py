"""
User Service - registration, login and account lookups.

The users collection is the credential store: it holds name, email,
avatar URL and a bcrypt hash of the password. Plaintext passwords are
never stored and never returned.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import Depends
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from devconnect.core.auth import TokenService, get_token_service, hash_password, verify_password
from devconnect.core.errors import ConflictError, InvalidCredentialsError, NotFoundError
from devconnect.db.mongodb import COLLECTIONS, get_collection, serialize_doc, to_object_id
from devconnect.services.gravatar import gravatar_url

logger = structlog.get_logger()

USER_EXISTS_MESSAGE = "User already exists."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
USER_NOT_FOUND_MESSAGE = "User not found."


class UserService:
    """
    Handles user accounts.
    Emails are matched exactly as given (no case folding).
    """

    def __init__(self, collection: Collection = None, tokens: TokenService = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["users"])
        self.tokens = tokens or get_token_service()

    def register(self, name: str, email: str, password: str) -> str:
        """
        Create an account and return a fresh token for it.

        Raises:
            ConflictError: an account with this exact email already exists
        """
        if self.collection.find_one({"email": email}, {"_id": 1}):
            raise ConflictError(USER_EXISTS_MESSAGE)

        doc = {
            "name": name,
            "email": email,
            "avatar": gravatar_url(email),
            "password": hash_password(password),
            "date": datetime.now(timezone.utc),
        }
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # lost a race with a concurrent registration for the same email
            raise ConflictError(USER_EXISTS_MESSAGE)
        user_id = str(result.inserted_id)

        logger.info("User registered", user_id=user_id)
        return self.tokens.issue(user_id)

    def authenticate(self, email: str, password: str) -> str:
        """
        Check credentials and return a token.

        Unknown email and wrong password raise the same error so callers
        can't tell which accounts exist.
        """
        user = self.collection.find_one({"email": email})
        if not user or not verify_password(password, user["password"]):
            logger.info("Login rejected")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        return self.tokens.issue(str(user["_id"]))

    def get_by_id(self, user_id: str) -> Optional[dict]:
        """Fetch a user document without its password hash."""
        doc = self.collection.find_one(
            {"_id": to_object_id(user_id, USER_NOT_FOUND_MESSAGE)},
            {"password": 0},
        )
        return serialize_doc(doc)

    def get_self(self, user_id: str) -> dict:
        """The authenticated user's own record, password omitted."""
        user = self.get_by_id(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user


def get_user_service(tokens: TokenService = Depends(get_token_service)) -> UserService:
    """FastAPI dependency - UserService bound to the live collection."""
    return UserService(tokens=tokens)
