"""SQLAlchemy models."""

from minicms.models.post import Post
from minicms.models.user import User

__all__ = [
    "User",
    "Post",
]
