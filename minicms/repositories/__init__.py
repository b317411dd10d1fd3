"""Data access for users and posts.

Repositories return typed records; ORM rows never leave this package.
"""

from minicms.repositories.posts import PostRepository
from minicms.repositories.users import UserRepository

__all__ = ["UserRepository", "PostRepository"]
