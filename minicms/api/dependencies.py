"""FastAPI dependencies for sessions, access control and data access."""

import logging
from typing import Annotated

from fastapi import Depends, Header, Request, Response
from sqlalchemy.orm import Session

from minicms.config import Settings
from minicms.database import get_db
from minicms.exceptions import CsrfMismatchError
from minicms.repositories.posts import PostRepository
from minicms.repositories.users import UserRepository
from minicms.services.access import require_authenticated
from minicms.services.assistant import ContentAssistant
from minicms.services.csrf import CsrfGuard
from minicms.services.sessions import CurrentUser, SessionContext, SessionStore

logger = logging.getLogger(__name__)

CSRF_HEADER = "X-CSRF-Token"


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_csrf_guard(store: Annotated[SessionStore, Depends(get_session_store)]) -> CsrfGuard:
    return CsrfGuard(store)


def set_session_cookie(response: Response, ctx: SessionContext, settings: Settings) -> None:
    """Send the session id to the browser."""
    response.set_cookie(
        settings.session_cookie_name,
        ctx.session_id,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def get_session(
    request: Request,
    response: Response,
    store: Annotated[SessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionContext:
    """Resolve the session cookie, starting a new anonymous session when needed."""
    ctx = store.load(request.cookies.get(settings.session_cookie_name))
    if ctx is None:
        ctx = store.create()
        set_session_cookie(response, ctx, settings)
    return ctx


def get_current_user(
    ctx: Annotated[SessionContext, Depends(get_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> CurrentUser:
    """Get the logged-in user of the session, or fail with 401."""
    return require_authenticated(store, ctx)


def verify_csrf(
    request: Request,
    ctx: Annotated[SessionContext, Depends(get_session)],
    guard: Annotated[CsrfGuard, Depends(get_csrf_guard)],
    x_csrf_token: Annotated[str | None, Header()] = None,
) -> None:
    """Reject the request before its body is used unless the CSRF token matches."""
    if not guard.verify(ctx, x_csrf_token):
        logger.warning(f"CSRF token rejected for {request.method} {request.url.path}")
        raise CsrfMismatchError()


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_post_repository(db: Annotated[Session, Depends(get_db)]) -> PostRepository:
    return PostRepository(db)


def get_content_assistant(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ContentAssistant:
    """Get content assistant instance."""
    return ContentAssistant(settings)
