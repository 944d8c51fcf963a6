"""
MongoDB Connection Utility

MongoDB stores:
- users: credentials (name, email, bcrypt hash, avatar)
- profiles: one per user, with embedded experience/education lists
- posts: with embedded likes and comments

Aggregates are loaded and saved as whole documents; embedded entries
(experience, education, likes, comments) carry their own ObjectId.
"""
from typing import Any, Optional

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from devconnect.core.config import get_settings
from devconnect.core.errors import MalformedIdError

logger = structlog.get_logger()

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def set_mongo_client(client: MongoClient) -> None:
    """Swap the process-wide client (e.g. for an in-memory client in tests)."""
    global _client, _db
    _client = client
    _db = None


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - users: registered accounts
    - profiles: developer profiles
    - posts: posts with likes and comments
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed", error=str(e))
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "profiles": "profiles",
    "posts": "posts",
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # One account per email (exact match, no normalisation)
    db[COLLECTIONS["users"]].create_index("email", unique=True)

    # One profile per user
    db[COLLECTIONS["profiles"]].create_index("user", unique=True)

    # Post feed is read newest first
    db[COLLECTIONS["posts"]].create_index([("date", DESCENDING), ("_id", DESCENDING)])
    db[COLLECTIONS["posts"]].create_index([("user", ASCENDING)])

    logger.info("MongoDB indexes created")


# ============================================================
# HELPERS: ObjectId parsing and JSON serialization
# ============================================================

def to_object_id(value: Any, message: str = "Id provided is not valid.") -> ObjectId:
    """Parse a path/claim id into an ObjectId, raising MalformedIdError if it isn't one."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a new id
    if value is None:
        raise MalformedIdError(message)
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise MalformedIdError(message)


def serialize_doc(doc: Any) -> Any:
    """Convert a MongoDB document (and nested entries) to a JSON-serializable value."""
    if doc is None:
        return None
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [serialize_doc(item) for item in doc]
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]
