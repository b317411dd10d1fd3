"""Authentication workflows: registration, login and logout."""

import logging

from minicms.exceptions import DuplicateEmailError, InvalidCredentialsError
from minicms.repositories.users import UserRepository
from minicms.schemas.user import UserRecord
from minicms.services.passwords import hash_password, verify_password
from minicms.services.sessions import SessionContext, SessionStore

logger = logging.getLogger(__name__)


def authenticate_user(users: UserRepository, email: str, password: str) -> UserRecord | None:
    """Authenticate a user by email and password."""
    user = users.find_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(users: UserRepository, name: str, email: str, password: str) -> UserRecord:
    """Create a new user, or raise DuplicateEmailError without writing anything."""
    if users.find_by_email(email):
        raise DuplicateEmailError()
    # the UNIQUE constraint still catches a registration racing this one
    user = users.create(name, email, hash_password(password))
    logger.info(f"Registered user {user.id}")
    return user


def login_user(
    store: SessionStore,
    ctx: SessionContext,
    users: UserRepository,
    email: str,
    password: str,
) -> UserRecord:
    """Log the session in.

    The session id is regenerated before the user is attached to it. On
    failure the session is left anonymous.
    """
    user = authenticate_user(users, email, password)
    if user is None:
        logger.info(f"Failed login for {email!r}")
        raise InvalidCredentialsError()

    store.regenerate(ctx)
    store.authenticate(ctx, user.id, user.name)
    logger.info(f"User {user.id} logged in")
    return user


def logout_user(store: SessionStore, ctx: SessionContext) -> None:
    """Destroy the session."""
    user_id = ctx.user_id
    store.destroy(ctx)
    if user_id is not None:
        logger.info(f"User {user_id} logged out")
