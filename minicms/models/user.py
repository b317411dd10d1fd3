"""User model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from minicms.database import Base


class User(Base):
    """Registered author. Email is the identity and is unique at the storage layer."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
