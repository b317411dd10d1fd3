"""Post model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from minicms.database import Base
from minicms.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """Published post. The author is fixed at creation."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(String(255), nullable=True)
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
