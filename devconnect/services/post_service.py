"""
Post Service - posts, likes and comments.

Posts keep a copy of the author's name and avatar taken when the post (or
comment) is written; later profile or account edits don't change them.
Likes and comments are embedded lists, newest first, each entry with its
own ObjectId.
"""

from datetime import datetime, timezone
from typing import List

import structlog
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import Collection

from devconnect.core.errors import ForbiddenError, NotFoundError
from devconnect.db.mongodb import COLLECTIONS, get_collection, serialize_doc, serialize_docs, to_object_id

logger = structlog.get_logger()

INVALID_POST_ID_MESSAGE = "Post id provided is not valid."
USER_NOT_FOUND_MESSAGE = "User not found."


class PostService:
    """
    Handles post documents and their embedded likes/comments.
    Ownership is checked by comparing the stored author id with the caller's id.
    """

    def __init__(self, posts: Collection = None, users: Collection = None):
        self.posts: Collection = posts if posts is not None else get_collection(COLLECTIONS["posts"])
        self.users: Collection = users if users is not None else get_collection(COLLECTIONS["users"])

    def _load(self, post_id: str, not_found_message: str) -> dict:
        post = self.posts.find_one({"_id": to_object_id(post_id, INVALID_POST_ID_MESSAGE)})
        if not post:
            raise NotFoundError(not_found_message)
        return post

    def _author(self, user_id: str) -> dict:
        return self.users.find_one(
            {"_id": to_object_id(user_id, USER_NOT_FOUND_MESSAGE)},
            {"name": 1, "avatar": 1},
        )

    # --------------------------------------------------------
    # Posts
    # --------------------------------------------------------

    def create_post(self, user_id: str, text: str) -> dict:
        user = self._author(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE, status_code=400)

        doc = {
            "user": user["_id"],
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "likes": [],
            "comments": [],
            "date": datetime.now(timezone.utc),
        }
        result = self.posts.insert_one(doc)
        logger.info("Post created", post_id=str(result.inserted_id), user_id=user_id)
        return serialize_doc(self.posts.find_one({"_id": result.inserted_id}))

    def list_posts(self) -> List[dict]:
        """All posts, newest first (insertion order breaks date ties)."""
        cursor = self.posts.find().sort([("date", DESCENDING), ("_id", DESCENDING)])
        return serialize_docs(list(cursor))

    def get_post(self, post_id: str) -> dict:
        return serialize_doc(self._load(post_id, "No post found by that ID."))

    def delete_post(self, post_id: str, user_id: str) -> None:
        post = self._load(post_id, "No post by that ID was found.")
        if str(post["user"]) != user_id:
            raise ForbiddenError("User is not authorized to delete this post.")

        self.posts.delete_one({"_id": post["_id"]})
        logger.info("Post deleted", post_id=post_id, user_id=user_id)

    # --------------------------------------------------------
    # Likes
    # --------------------------------------------------------

    def add_like(self, post_id: str, user_id: str) -> List[dict]:
        """
        Toggle the caller's like on a post and return the resulting likes.

        If the user has already liked the post every like of theirs is
        removed (there should only ever be one); otherwise a like is added
        at the front.
        """
        post = self._load(post_id, "No post found.")
        likes = post.get("likes", [])
        remaining = [like for like in likes if str(like["user"]) != user_id]

        if len(remaining) == len(likes):
            remaining.insert(0, {"_id": ObjectId(), "user": to_object_id(user_id, USER_NOT_FOUND_MESSAGE)})

        self.posts.update_one({"_id": post["_id"]}, {"$set": {"likes": remaining}})
        return serialize_docs(remaining)

    # --------------------------------------------------------
    # Comments
    # --------------------------------------------------------

    def add_comment(self, post_id: str, text: str, user_id: str) -> List[dict]:
        post = self._load(post_id, "No Post found by that ID.")
        user = self._author(user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)

        comment = {
            "_id": ObjectId(),
            "user": user["_id"],
            "text": text,
            "name": user.get("name"),
            "avatar": user.get("avatar"),
            "date": datetime.now(timezone.utc),
        }
        comments = [comment] + post.get("comments", [])
        self.posts.update_one({"_id": post["_id"]}, {"$set": {"comments": comments}})
        return serialize_docs(comments)

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[dict]:
        post = self._load(post_id, "Post not found.")
        comments = post.get("comments", [])

        comment = next((c for c in comments if str(c["_id"]) == comment_id), None)
        if not comment:
            raise NotFoundError("Comment not found.")

        if str(comment["user"]) != user_id:
            raise ForbiddenError("You are not authorized to delete this comment.")

        comments = [c for c in comments if c["_id"] != comment["_id"]]
        self.posts.update_one({"_id": post["_id"]}, {"$set": {"comments": comments}})
        return serialize_docs(comments)


def get_post_service() -> PostService:
    """FastAPI dependency - PostService bound to the live collections."""
    return PostService()
