"""
JWT token backend implementing the TokenManager interface.

This module follows Black Box Design principles:
- Implements TokenManager protocol
- Accepts the symmetric key via constructor injection
- No direct environment variable access
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import jwt

from .errors import InvalidTokenError
from .interfaces import TokenManager, strip_bearer_prefix
from .payload import Payload, new_payload

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "HS256"

# Any HMAC variant signed with our key is accepted; asymmetric and "none" are not
ACCEPTED_ALGORITHMS = ["HS256", "HS384", "HS512"]


class JWTMaker(TokenManager):
    """
    Issues and validates HMAC-signed JWTs.

    Claims use the field names of the payload with timestamps as
    whole unix seconds:
        {"id", "username", "issued_at", "expired_at"} and "user_id" when set
    """

    def __init__(self, secret_key: str):
        """
        Initialize the maker with a symmetric key.

        Args:
            secret_key: Shared HMAC secret, must not be empty

        Raises:
            ValueError: If the key is empty

        Example:
            >>> maker = JWTMaker("your-secret-key")
        """
        if not secret_key:
            raise ValueError("symmetric key must be set")
        self.symmetric_key = secret_key

    def generate_token(
        self,
        username: str,
        duration: timedelta,
        user_id: Optional[UUID] = None
    ) -> str:
        """
        Create a signed JWT for a user.

        Example:
            >>> token = maker.generate_token("user123", timedelta(hours=1))
        """
        payload = new_payload(username, duration, user_id)
        return jwt.encode(self._to_claims(payload), self.symmetric_key, algorithm=SIGNING_ALGORITHM)

    def validate_token(self, token: str) -> Payload:
        """
        Verify a JWT and return its payload.

        Example:
            >>> payload = maker.validate_token(token)
        """
        token = strip_bearer_prefix(token)

        try:
            claims = jwt.decode(token, self.symmetric_key, algorithms=ACCEPTED_ALGORITHMS)
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected JWT: {type(e).__name__}")
            raise InvalidTokenError() from e

        try:
            payload = self._from_claims(claims)
        except (ValueError, OverflowError, OSError) as e:
            # pydantic ValidationError is a ValueError
            logger.debug(f"Rejected JWT: malformed claims ({type(e).__name__})")
            raise InvalidTokenError() from e

        payload.valid()
        return payload

    @staticmethod
    def _to_claims(payload: Payload) -> Dict[str, Any]:
        # Issue time rounds down and expiry rounds up so the lifetime never shrinks
        claims: Dict[str, Any] = {
            "id": str(payload.id),
            "username": payload.username,
            "issued_at": math.floor(payload.issued_at.timestamp()),
            "expired_at": math.ceil(payload.expired_at.timestamp()),
        }
        if payload.user_id is not None:
            claims["user_id"] = str(payload.user_id)
        return claims

    @staticmethod
    def _from_claims(claims: Dict[str, Any]) -> Payload:
        # Unix seconds are converted here; pydantic would read large values as milliseconds
        fields = dict(claims)
        for name in ("issued_at", "expired_at"):
            value = fields.get(name)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                fields[name] = datetime.fromtimestamp(value, tz=timezone.utc)
        return Payload.model_validate(fields)
