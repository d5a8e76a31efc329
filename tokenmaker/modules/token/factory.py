"""
Token manager factory following Black Box Design principles.

This factory:
- Selects the token backend based on configuration
- Injects the symmetric key
- Returns only the TokenManager interface (hiding implementation)
"""

import logging
from typing import Union

from .interfaces import TokenManager, TokenType
from .jwt_maker import JWTMaker
from .paseto_maker import PasetoMaker
from ...config.provider import ConfigProvider

logger = logging.getLogger(__name__)


def new_token_manager(token_type: Union[str, TokenType], secret_key: str) -> TokenManager:
    """
    Create a token manager for the given backend type.

    Args:
        token_type: "jwt" or "paseto" (case-insensitive) or a TokenType
        secret_key: Symmetric key for the backend

    Returns:
        TokenManager implementation

    Raises:
        ValueError: If the type is unknown or the key is rejected by the backend

    Example:
        >>> manager = new_token_manager("jwt", "your-secret-key")
    """
    if isinstance(token_type, TokenType):
        selected = token_type
    else:
        try:
            selected = TokenType(str(token_type).strip().lower())
        except ValueError:
            supported = ", ".join(t.value for t in TokenType)
            raise ValueError(f"unsupported token type: {token_type!r} (expected one of: {supported})")

    if selected is TokenType.PASETO:
        manager: TokenManager = PasetoMaker(secret_key)
    else:
        manager = JWTMaker(secret_key)

    logger.info(f"Token manager initialized with {selected.value} backend")
    return manager


class TokenManagerFactory:
    """
    Factory for building the token manager.

    This is the composition root that reads configuration
    and returns only the public interface.
    """

    @staticmethod
    def build(config_provider: ConfigProvider) -> TokenManager:
        """
        Build a token manager from configuration.

        Args:
            config_provider: Configuration provider

        Returns:
            TokenManager for the configured backend
        """
        token_config = config_provider.get_token_config()
        return new_token_manager(token_config.token_type, token_config.symmetric_key)
