"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from minicms.api.dependencies import (
    clear_session_cookie,
    get_app_settings,
    get_csrf_guard,
    get_current_user,
    get_session,
    get_session_store,
    get_user_repository,
    set_session_cookie,
    verify_csrf,
)
from minicms.config import Settings
from minicms.exceptions import NotFoundError
from minicms.repositories.users import UserRepository
from minicms.schemas.auth import (
    CsrfTokenResponse,
    SessionResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from minicms.services.auth import login_user, logout_user, register_user
from minicms.services.csrf import CsrfGuard
from minicms.services.sessions import CurrentUser, SessionContext, SessionStore

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/csrf", response_model=CsrfTokenResponse)
def get_csrf_token(
    ctx: Annotated[SessionContext, Depends(get_session)],
    guard: Annotated[CsrfGuard, Depends(get_csrf_guard)],
):
    """Return the session's CSRF token, starting a session if there is none."""
    return CsrfTokenResponse(csrf_token=guard.issue(ctx))


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_csrf)],
)
def register(
    user_data: UserRegister,
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Register a new user."""
    user = register_user(users, user_data.name, user_data.email, user_data.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=SessionResponse, dependencies=[Depends(verify_csrf)])
def login(
    credentials: UserLogin,
    response: Response,
    ctx: Annotated[SessionContext, Depends(get_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    guard: Annotated[CsrfGuard, Depends(get_csrf_guard)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password.

    The session moves to a new id, which is sent back as a fresh cookie.
    """
    user = login_user(store, ctx, users, credentials.email.strip(), credentials.password)
    set_session_cookie(response, ctx, settings)
    return SessionResponse(user=UserResponse.model_validate(user), csrf_token=guard.issue(ctx))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    response: Response,
    ctx: Annotated[SessionContext, Depends(get_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Destroy the session and clear its cookie."""
    logout_user(store, ctx)
    clear_session_cookie(response, settings)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """Get current user information."""
    user = users.get(current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)
