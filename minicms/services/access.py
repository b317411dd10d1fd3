"""Access control: the only check is whether the session is logged in."""

from minicms.exceptions import UnauthenticatedError
from minicms.services.sessions import CurrentUser, SessionContext, SessionStore


def require_authenticated(store: SessionStore, ctx: SessionContext | None) -> CurrentUser:
    """Return the session's user or raise UnauthenticatedError.

    There is no per-post ownership check: any logged-in user may edit or
    delete any post.
    """
    user = store.current_user(ctx)
    if user is None:
        raise UnauthenticatedError()
    return user
