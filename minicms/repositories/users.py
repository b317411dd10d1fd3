"""User repository."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from minicms.exceptions import DuplicateEmailError
from minicms.models.user import User
from minicms.schemas.user import UserRecord


class UserRepository:
    """Persistence for users."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Insert a user.

        The UNIQUE constraint on email decides duplicates, so two concurrent
        registrations cannot both succeed.
        """
        user = User(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmailError() from e
        self.db.refresh(user)
        return UserRecord.model_validate(user)

    def find_by_email(self, email: str) -> UserRecord | None:
        """Exact lookup by email."""
        user = self.db.execute(select(User).where(User.email == email)).scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    def get(self, user_id: int) -> UserRecord | None:
        user = self.db.get(User, user_id)
        return UserRecord.model_validate(user) if user else None
