"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Protocol


@dataclass
class TokenConfig:
    """Token backend configuration."""
    token_type: str
    symmetric_key: str
    duration: timedelta


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str
    log_dir: str
    log_file_name: Optional[str]

    @property
    def file_logging_enabled(self) -> bool:
        return bool(self.log_file_name)


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_token_config(self) -> TokenConfig:
        """Get token backend configuration."""
        ...

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the provider.

        Args:
            environ: Variables to read instead of os.environ
        """
        self.environ = os.environ if environ is None else environ

    def get_token_config(self) -> TokenConfig:
        """Get token backend configuration from environment variables."""
        # No default key for security
        symmetric_key = self.environ.get("TOKEN_SYMMETRIC_KEY")
        if not symmetric_key:
            raise ValueError(
                "TOKEN_SYMMETRIC_KEY environment variable is required. "
                "PASETO tokens need exactly 32 bytes, JWT tokens any non-empty secret."
            )

        duration_env = self.environ.get("TOKEN_DURATION_MINUTES", "15")
        try:
            duration_minutes = int(duration_env)
        except ValueError:
            raise ValueError(f"TOKEN_DURATION_MINUTES must be an integer, got {duration_env!r}")

        return TokenConfig(
            token_type=self.environ.get("TOKEN_TYPE", "jwt"),
            symmetric_key=symmetric_key,
            duration=timedelta(minutes=duration_minutes)
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig(
            level=self.environ.get("LOG_LEVEL", "INFO").upper(),
            log_dir=self.environ.get("LOG_DIR", "logs"),
            log_file_name=self.environ.get("LOG_FILE_NAME") or None
        )
