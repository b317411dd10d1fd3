"""Domain errors raised by services and repositories.

Handlers registered in ``minicms.main`` turn these into HTTP responses.
"""


class CmsError(Exception):
    """Base class for application errors."""

    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidCredentialsError(CmsError):
    """Login failed. Same message whether the email is unknown or the password is wrong."""

    status_code = 401
    detail = "Invalid email or password"


class UnauthenticatedError(CmsError):
    status_code = 401
    detail = "Not authenticated"


class CsrfMismatchError(CmsError):
    status_code = 403
    detail = "Invalid CSRF token"


class NotFoundError(CmsError):
    status_code = 404
    detail = "Not found"


class DuplicateEmailError(CmsError):
    status_code = 409
    detail = "Email already registered"


class InvalidUploadError(CmsError):
    status_code = 422
    detail = "Invalid upload"


class GenerationFailedError(CmsError):
    """Content assistant failure. The message is shown to the requester as-is."""

    status_code = 500
    detail = "Content generation failed"


class StorageFailureError(CmsError):
    status_code = 500
    detail = "Internal server error"
