"""
Tokenmaker - Token issuance and validation

A small library for issuing and validating short-lived access tokens.

Architecture:
- Each backend is self-contained behind the TokenManager interface
- Backends are completely replaceable
- Callers only see the factory and the Payload they get back

Modules:
- token: Payload, backends (JWT, PASETO) and the manager factory
- config: Environment-based configuration
- logging_config: Stdout and log file setup
"""

__version__ = "1.0.1"
__author__ = "github.com/lordofthemind"
__description__ = (
    "Tokenmaker provides utilities for generating and validating JWT and Paseto tokens, "
    "supporting token expiration and validation."
)
