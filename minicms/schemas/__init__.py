"""Pydantic schemas for records and API payloads."""

from minicms.schemas.auth import (
    CsrfTokenResponse,
    SessionResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from minicms.schemas.post import GenerateRequest, GenerateResponse, PostRecord, PostResponse
from minicms.schemas.user import UserRecord

__all__ = [
    "CsrfTokenResponse",
    "GenerateRequest",
    "GenerateResponse",
    "PostRecord",
    "PostResponse",
    "SessionResponse",
    "UserLogin",
    "UserRecord",
    "UserRegister",
    "UserResponse",
]
