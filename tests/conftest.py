"""
Shared pytest fixtures for Tokenmaker tests.

This module provides common fixtures including:
- Symmetric keys for both backends
- Ready-made JWT and PASETO makers
- Logging reset so tests that reconfigure logging don't leak handlers
"""

import logging
import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tokenmaker.modules.token import JWTMaker, PasetoMaker

JWT_SECRET = "jwt-test-secret-0123456789abcdefghij0123456789abcdefghij0123456789"
PASETO_KEY = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def jwt_secret() -> str:
    """HMAC secret long enough for every HS* algorithm."""
    return JWT_SECRET


@pytest.fixture
def paseto_key() -> str:
    """Exactly 32 bytes for XChaCha20-Poly1305."""
    return PASETO_KEY


@pytest.fixture
def jwt_maker(jwt_secret) -> JWTMaker:
    return JWTMaker(jwt_secret)


@pytest.fixture
def paseto_maker(paseto_key) -> PasetoMaker:
    return PasetoMaker(paseto_key)


@pytest.fixture
def reset_logging():
    """Close and detach any handlers installed during the test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level

    yield

    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
