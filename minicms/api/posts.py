"""Post API endpoints.

Reading is public. Writing needs a logged-in session and a valid CSRF token;
any logged-in user may edit or delete any post.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from minicms.api.dependencies import (
    get_app_settings,
    get_current_user,
    get_post_repository,
    verify_csrf,
)
from minicms.config import Settings
from minicms.exceptions import NotFoundError
from minicms.repositories.posts import PostRepository
from minicms.schemas.post import PostResponse
from minicms.services.sessions import CurrentUser
from minicms.services.uploads import save_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


def _require_text(title: str, content: str) -> tuple[str, str]:
    title, content = title.strip(), content.strip()
    if not title or not content:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Title and content are required.",
        )
    return title, content


@router.get("", response_model=list[PostResponse])
def list_posts(posts: Annotated[PostRepository, Depends(get_post_repository)]):
    """Get all posts, newest first."""
    return [PostResponse.from_record(post) for post in posts.list()]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    posts: Annotated[PostRepository, Depends(get_post_repository)],
):
    """Get a specific post."""
    post = posts.find(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return PostResponse.from_record(post)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_csrf)],
)
async def create_post(
    title: Annotated[str, Form(max_length=255)],
    content: Annotated[str, Form()],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    posts: Annotated[PostRepository, Depends(get_post_repository)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    image: Annotated[UploadFile | None, File()] = None,
):
    """Create a new post, optionally with a JPEG or PNG image."""
    title, content = _require_text(title, content)
    image_name = await save_image(image, settings)
    post = posts.create(title, content, image_name, current_user.id)
    return PostResponse.from_record(post)


@router.put("/{post_id}", response_model=PostResponse, dependencies=[Depends(verify_csrf)])
async def update_post(
    post_id: int,
    title: Annotated[str, Form(max_length=255)],
    content: Annotated[str, Form()],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    posts: Annotated[PostRepository, Depends(get_post_repository)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    image: Annotated[UploadFile | None, File()] = None,
):
    """Update a post. Without a new image the current one is kept."""
    title, content = _require_text(title, content)
    if posts.find(post_id) is None:
        raise NotFoundError("Post not found")

    image_name = await save_image(image, settings)
    if not posts.update(post_id, title, content, image_name):
        raise NotFoundError("Post not found")

    logger.info(f"User {current_user.id} updated post {post_id}")
    return PostResponse.from_record(posts.find(post_id))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(verify_csrf)],
)
def delete_post(
    post_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    posts: Annotated[PostRepository, Depends(get_post_repository)],
):
    """Delete a post. Deleting an unknown id succeeds."""
    posts.delete(post_id)
    logger.info(f"User {current_user.id} deleted post {post_id}")
