"""User record returned by the user repository."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserRecord(BaseModel):
    """Stored user. Carries the password hash, so never serialize it to clients."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
