"""
PASETO token backend implementing the TokenManager interface.

Tokens are v2.local: the JSON payload is encrypted and authenticated
with XChaCha20-Poly1305, so the token body is opaque to clients.
"""

import logging
from datetime import timedelta
from typing import Optional, Union
from uuid import UUID

import pyseto
from pydantic import ValidationError
from pyseto import Key

from .errors import InvalidTokenError
from .interfaces import TokenManager, strip_bearer_prefix
from .payload import Payload, new_payload

logger = logging.getLogger(__name__)

# XChaCha20-Poly1305 key size
KEY_SIZE = 32

PASETO_VERSION = 2


class PasetoMaker(TokenManager):
    """Issues and validates PASETO v2.local tokens."""

    def __init__(self, secret_key: Union[str, bytes]):
        """
        Initialize the maker with a symmetric key.

        Args:
            secret_key: Exactly 32 bytes (str keys are UTF-8 encoded)

        Raises:
            ValueError: If the key is not exactly 32 bytes

        Example:
            >>> maker = PasetoMaker("12345678901234567890123456789012")
        """
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        if len(secret_key) != KEY_SIZE:
            raise ValueError(f"invalid key size: must be exactly {KEY_SIZE} bytes")

        self.symmetric_key = secret_key
        self._key = Key.new(version=PASETO_VERSION, purpose="local", key=secret_key)

    def generate_token(
        self,
        username: str,
        duration: timedelta,
        user_id: Optional[UUID] = None
    ) -> str:
        """
        Create an encrypted PASETO token for a user.

        Example:
            >>> token = maker.generate_token("user123", timedelta(hours=1))
        """
        payload = new_payload(username, duration, user_id)
        token = pyseto.encode(self._key, payload.model_dump_json(exclude_none=True).encode("utf-8"))
        return token.decode("utf-8")

    def validate_token(self, token: str) -> Payload:
        """
        Decrypt a PASETO token and return its payload.

        Example:
            >>> payload = maker.validate_token(token)
        """
        token = strip_bearer_prefix(token)

        try:
            decoded = pyseto.decode(self._key, token)
        except (pyseto.PysetoError, ValueError) as e:
            logger.debug(f"Rejected PASETO token: {type(e).__name__}")
            raise InvalidTokenError() from e

        try:
            payload = Payload.model_validate_json(decoded.payload)
        except ValidationError as e:
            logger.debug(f"Rejected PASETO token: malformed payload ({e.error_count()} errors)")
            raise InvalidTokenError() from e

        payload.valid()
        return payload
