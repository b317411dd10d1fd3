"""Post repository."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from minicms.models.post import Post
from minicms.models.user import User
from minicms.schemas.post import PostRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PostRepository:
    """Persistence for posts.

    Every statement is built from SQLAlchemy constructs, so caller values are
    always sent as bound parameters. Each write is a single statement
    committed on its own.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = _utcnow) -> None:
        self.db = db
        self.clock = clock

    def _select_with_author(self):
        return select(Post, User.name.label("author_name")).outerjoin(
            User, Post.author_id == User.id
        )

    @staticmethod
    def _to_record(post: Post, author_name: str | None) -> PostRecord:
        return PostRecord(
            id=post.id,
            title=post.title,
            content=post.content,
            image=post.image,
            author_id=post.author_id,
            author_name=author_name,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def list(self) -> list[PostRecord]:
        """All posts with author names, newest first."""
        rows = self.db.execute(
            self._select_with_author().order_by(Post.created_at.desc(), Post.id.desc())
        ).all()
        return [self._to_record(post, author_name) for post, author_name in rows]

    def find(self, post_id: int) -> PostRecord | None:
        row = self.db.execute(self._select_with_author().where(Post.id == post_id)).first()
        if row is None:
            return None
        post, author_name = row
        return self._to_record(post, author_name)

    def create(self, title: str, content: str, image: str | None, author_id: int) -> PostRecord:
        """Store a new post; created_at and updated_at get the same timestamp."""
        now = self.clock()
        post = Post(
            title=title,
            content=content,
            image=image,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(post)
        self.db.commit()
        logger.info(f"Created post {post.id} by user {author_id}")
        return self.find(post.id)

    def update(self, post_id: int, title: str, content: str, image: str | None = None) -> bool:
        """Update title and content, and the image only when a new one is given.

        Returns False when no post has this id.
        """
        values = {"title": title, "content": content, "updated_at": self.clock()}
        if image is not None:
            values["image"] = image
        result = self.db.execute(update(Post).where(Post.id == post_id).values(**values))
        self.db.commit()
        # the identity map may still hold the pre-update row
        self.db.expire_all()
        return result.rowcount > 0

    def delete(self, post_id: int) -> None:
        """Hard delete. Unknown ids are a no-op."""
        self.db.execute(delete(Post).where(Post.id == post_id))
        self.db.commit()
        self.db.expire_all()
