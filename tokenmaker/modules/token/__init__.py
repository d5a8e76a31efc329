"""
Token Module - Black Box Interface

Purpose: Issue and validate access tokens
Interface: new_token_manager(), TokenManager.generate_token(), TokenManager.validate_token()
Hidden: Signing scheme, claim layout, key handling

Backends (JWT, PASETO) can be swapped through configuration
without affecting callers.
"""

from .errors import ExpiredTokenError, InvalidTokenError, TokenError
from .factory import TokenManagerFactory, new_token_manager
from .interfaces import TokenManager, TokenType
from .jwt_maker import JWTMaker
from .paseto_maker import PasetoMaker
from .payload import Payload, new_payload

__all__ = [
    "ExpiredTokenError",
    "InvalidTokenError",
    "JWTMaker",
    "PasetoMaker",
    "Payload",
    "TokenError",
    "TokenManager",
    "TokenManagerFactory",
    "TokenType",
    "new_payload",
    "new_token_manager",
]
