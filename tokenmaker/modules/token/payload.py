"""
Token payload model.

The payload is the data embedded in every issued token, whichever
backend signs or encrypts it.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ExpiredTokenError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Payload(BaseModel):
    """Data carried inside a token."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="Unique token identifier")
    user_id: Optional[UUID] = Field(None, description="Optional subject identifier")
    username: str = Field(..., description="Subject the token was issued to", min_length=1)
    issued_at: datetime = Field(..., description="Issue time (UTC)")
    expired_at: datetime = Field(..., description="Expiry time (UTC)")

    @field_validator("issued_at", "expired_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Treat naive datetimes as UTC and normalize aware ones to UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def check_lifetime(self) -> "Payload":
        if self.expired_at <= self.issued_at:
            raise ValueError("expired_at must be after issued_at")
        return self

    @property
    def is_expired(self) -> bool:
        return _utcnow() > self.expired_at

    def valid(self) -> None:
        """
        Check that the payload has not expired.

        Raises:
            ExpiredTokenError: If the current time is past expired_at

        Example:
            >>> payload = new_payload("user123", timedelta(hours=1))
            >>> payload.valid()
        """
        if self.is_expired:
            raise ExpiredTokenError()


def new_payload(username: str, duration: timedelta, user_id: Optional[UUID] = None) -> Payload:
    """
    Create a fresh payload for a username and token lifetime.

    Args:
        username: Subject the token is issued to
        duration: Token lifetime, must be positive
        user_id: Optional subject UUID

    Returns:
        New Payload with a random id

    Raises:
        ValueError: If duration is not positive or username is empty
    """
    if duration <= timedelta(0):
        raise ValueError("token duration must be positive")

    issued_at = _utcnow()
    return Payload(
        id=uuid4(),
        user_id=user_id,
        username=username,
        issued_at=issued_at,
        expired_at=issued_at + duration,
    )
