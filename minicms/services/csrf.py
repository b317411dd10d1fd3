"""Anti-forgery tokens bound to a session."""

import hmac
import secrets

from minicms.services.sessions import SessionContext, SessionStore

# 32 random bytes, hex encoded
TOKEN_BYTES = 32


class CsrfGuard:
    """Issues and checks the per-session CSRF token."""

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def issue(self, ctx: SessionContext) -> str:
        """Return the session's token, creating and persisting one if needed."""
        if not ctx.csrf_token:
            ctx.csrf_token = secrets.token_hex(TOKEN_BYTES)
            self.store.save(ctx)
        return ctx.csrf_token

    def verify(self, ctx: SessionContext | None, presented: str | None) -> bool:
        """Constant-time comparison against the stored token."""
        if ctx is None or ctx.destroyed or not ctx.csrf_token or not presented:
            return False
        return hmac.compare_digest(ctx.csrf_token.encode(), presented.encode())
