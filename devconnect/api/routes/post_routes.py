"""
Post Routes

POST /posts - Create a post
GET /posts - List all posts, newest first
GET /posts/{post_id} - Get post by id
DELETE /posts/{post_id} - Delete own post
PUT /posts/like/{post_id} - Like or unlike a post
POST /posts/comment/{post_id} - Comment on a post
DELETE /posts/comment/{post_id}/{comment_id} - Delete own comment
"""

from fastapi import APIRouter, Depends
from typing import List

from devconnect.core.auth import get_current_user
from devconnect.services.post_service import PostService, get_post_service
from devconnect.schemas.schemas import (
    PostCreate, PostResponse, CommentCreate, CommentResponse, LikeResponse, MessageResponse
)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post("", response_model=PostResponse)
async def create_post(
    data: PostCreate,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    """Create a post. Author name and avatar are copied onto it."""
    return posts.create_post(user["id"], data.text)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    return posts.list_posts()


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    return posts.get_post(post_id)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    """Delete a post. Only its author may do this."""
    posts.delete_post(post_id, user["id"])
    return MessageResponse(msg="Post has been deleted.")


@router.put("/like/{post_id}", response_model=List[LikeResponse])
async def like_post(
    post_id: str,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    """Toggle the current user's like and return the post's likes."""
    return posts.add_like(post_id, user["id"])


@router.post("/comment/{post_id}", response_model=List[CommentResponse])
async def add_comment(
    post_id: str,
    data: CommentCreate,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    return posts.add_comment(post_id, data.text, user["id"])


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[CommentResponse])
async def delete_comment(
    post_id: str,
    comment_id: str,
    user: dict = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    """Delete a comment. Only its author may do this."""
    return posts.delete_comment(post_id, comment_id, user["id"])
