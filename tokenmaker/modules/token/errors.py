"""Errors raised when a token fails validation."""


class TokenError(Exception):
    """Base class for token validation failures."""


class InvalidTokenError(TokenError):
    """Signature invalid, token undecodable or claims malformed."""

    def __init__(self, message: str = "token validation failed: signature invalid or claims malformed"):
        super().__init__(message)


class ExpiredTokenError(TokenError):
    """Token is authentic but its expiry time has passed."""

    def __init__(self, message: str = "token validation failed: token has expired"):
        super().__init__(message)
