"""Token manager interfaces following Black Box Design principles."""
from datetime import timedelta
from enum import Enum
from typing import Optional, Protocol
from uuid import UUID

from .payload import Payload


class TokenType(str, Enum):
    """Supported token backends."""

    JWT = "jwt"
    PASETO = "paseto"


class TokenManager(Protocol):
    """Protocol for token backends - allows swappable implementations."""

    def generate_token(
        self,
        username: str,
        duration: timedelta,
        user_id: Optional[UUID] = None
    ) -> str:
        """
        Issue a token for a user.

        Args:
            username: Subject the token is issued to
            duration: Token lifetime
            user_id: Optional subject UUID

        Returns:
            Token string
        """
        ...

    def validate_token(self, token: str) -> Payload:
        """
        Validate a token and return its payload.

        Args:
            token: Token string (with or without Bearer prefix)

        Returns:
            Decoded Payload

        Raises:
            InvalidTokenError: Token is not authentic or is malformed
            ExpiredTokenError: Token is authentic but expired
        """
        ...


def strip_bearer_prefix(token: str) -> str:
    """Remove a leading "Bearer " from an Authorization header value."""
    if token.startswith("Bearer "):
        return token[7:]
    return token
