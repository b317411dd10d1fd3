"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostRecord(BaseModel):
    """Stored post joined with its author's display name."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    content: str
    image: str | None
    author_id: int
    author_name: str | None
    created_at: datetime
    updated_at: datetime


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    image: str | None
    image_url: str | None = None
    author_id: int
    author_name: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: PostRecord) -> "PostResponse":
        response = cls.model_validate(record)
        if record.image:
            response.image_url = f"/uploads/{record.image}"
        return response


class GenerateRequest(BaseModel):
    """Request draft text for a post title."""

    title: str = Field("", max_length=255)


class GenerateResponse(BaseModel):
    content: str
