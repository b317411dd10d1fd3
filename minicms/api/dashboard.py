"""Dashboard endpoint for logged-in authors."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from minicms.api.dependencies import (
    get_csrf_guard,
    get_current_user,
    get_post_repository,
    get_session,
)
from minicms.repositories.posts import PostRepository
from minicms.schemas.post import PostResponse
from minicms.services.csrf import CsrfGuard
from minicms.services.sessions import CurrentUser, SessionContext

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


class DashboardUser(BaseModel):
    id: int
    name: str


class DashboardResponse(BaseModel):
    """Everything the dashboard page needs in one call."""

    user: DashboardUser
    posts: list[PostResponse]
    csrf_token: str


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ctx: Annotated[SessionContext, Depends(get_session)],
    guard: Annotated[CsrfGuard, Depends(get_csrf_guard)],
    posts: Annotated[PostRepository, Depends(get_post_repository)],
):
    """List all posts for management, with the token needed to edit them."""
    return DashboardResponse(
        user=DashboardUser(id=current_user.id, name=current_user.name),
        posts=[PostResponse.from_record(post) for post in posts.list()],
        csrf_token=guard.issue(ctx),
    )
