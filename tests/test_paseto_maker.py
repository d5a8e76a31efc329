"""
Unit tests for the PASETO token backend.
"""

import json
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pyseto
import pytest
from pyseto import Key

from tokenmaker.modules.token.errors import ExpiredTokenError, InvalidTokenError
from tokenmaker.modules.token.paseto_maker import KEY_SIZE, PasetoMaker
from tokenmaker.modules.token.payload import Payload


def encrypt_raw(key: str, body: bytes) -> str:
    """Encrypt arbitrary bytes as a v2.local token with the given key."""
    paseto_key = Key.new(version=2, purpose="local", key=key.encode("utf-8"))
    return pyseto.encode(paseto_key, body).decode("utf-8")


class TestPasetoMakerInit:
    """Test PasetoMaker construction."""

    @pytest.mark.parametrize("size", [0, 16, KEY_SIZE - 1, KEY_SIZE + 1])
    def test_wrong_key_size_rejected(self, size):
        """Test keys that are not exactly 32 bytes are refused."""
        with pytest.raises(ValueError, match="must be exactly 32 bytes"):
            PasetoMaker("k" * size)

    def test_bytes_key_accepted(self):
        """Test a raw 32-byte key works."""
        maker = PasetoMaker(bytes(range(KEY_SIZE)))
        token = maker.generate_token("user123", timedelta(minutes=5))

        assert maker.validate_token(token).username == "user123"

    def test_key_size_counts_utf8_bytes(self):
        """Test multi-byte characters count by their encoded size."""
        # 16 two-byte characters encode to 32 bytes
        assert PasetoMaker("é" * 16).symmetric_key == ("é" * 16).encode("utf-8")

        with pytest.raises(ValueError):
            PasetoMaker("é" * KEY_SIZE)


class TestGenerateToken:
    """Test PASETO issuance."""

    def test_generate_and_validate(self, paseto_maker):
        """Test a freshly issued token validates to the same subject."""
        token = paseto_maker.generate_token("user123", timedelta(minutes=15))
        payload = paseto_maker.validate_token(token)

        assert payload.username == "user123"
        assert payload.user_id is None
        assert payload.expired_at - payload.issued_at == timedelta(minutes=15)

    def test_token_format(self, paseto_maker):
        """Test tokens are v2.local and do not expose the username."""
        token = paseto_maker.generate_token("user123", timedelta(minutes=15))

        assert token.startswith("v2.local.")
        assert "user123" not in token

    def test_user_id_round_trip(self, paseto_maker):
        """Test the subject id survives validation."""
        user_id = uuid4()
        token = paseto_maker.generate_token("user123", timedelta(hours=1), user_id)

        assert paseto_maker.validate_token(token).user_id == user_id

    def test_payload_round_trip_keeps_precision(self, paseto_maker):
        """Test timestamps keep sub-second precision through encryption."""
        token = paseto_maker.generate_token("user123", timedelta(milliseconds=1500))
        payload = paseto_maker.validate_token(token)

        assert payload.expired_at - payload.issued_at == timedelta(milliseconds=1500)

    def test_tokens_differ_for_same_user(self, paseto_maker):
        """Test every issuance produces a distinct token."""
        first = paseto_maker.generate_token("user123", timedelta(hours=1))
        second = paseto_maker.generate_token("user123", timedelta(hours=1))

        assert first != second

    def test_non_positive_duration_rejected(self, paseto_maker):
        """Test a token cannot be issued already expired."""
        with pytest.raises(ValueError):
            paseto_maker.generate_token("user123", timedelta(seconds=-1))


class TestValidateToken:
    """Test PASETO validation."""

    def test_bearer_prefix_accepted(self, paseto_maker):
        """Test an Authorization header value validates."""
        token = paseto_maker.generate_token("user123", timedelta(minutes=5))

        assert paseto_maker.validate_token(f"Bearer {token}").username == "user123"

    def test_expired_token(self, paseto_maker, paseto_key):
        """Test an authentic but expired token raises ExpiredTokenError."""
        now = datetime.now(timezone.utc)
        expired = Payload(
            id=uuid4(),
            username="user123",
            issued_at=now - timedelta(hours=2),
            expired_at=now - timedelta(hours=1),
        )
        token = encrypt_raw(paseto_key, expired.model_dump_json().encode("utf-8"))

        with pytest.raises(ExpiredTokenError, match="token has expired"):
            paseto_maker.validate_token(token)

    def test_wrong_key(self, paseto_maker):
        """Test a token encrypted with another key is rejected."""
        other = PasetoMaker("abcdefghijklmnopqrstuvwxyz012345")
        token = other.generate_token("user123", timedelta(minutes=5))

        with pytest.raises(InvalidTokenError, match="signature invalid or claims malformed"):
            paseto_maker.validate_token(token)

    def test_tampered_token(self, paseto_maker):
        """Test altering the ciphertext invalidates the token."""
        token = paseto_maker.generate_token("user123", timedelta(minutes=5))
        prefix, body = token[:len("v2.local.")], token[len("v2.local."):]
        middle = len(body) // 2
        flipped = "A" if body[middle] != "A" else "B"

        with pytest.raises(InvalidTokenError):
            paseto_maker.validate_token(prefix + body[:middle] + flipped + body[middle + 1:])

    @pytest.mark.parametrize("token", ["", "not-a-token", "v2.local.", "v2.local.!!!"])
    def test_garbage_token(self, paseto_maker, token):
        """Test undecodable strings are rejected."""
        with pytest.raises(InvalidTokenError):
            paseto_maker.validate_token(token)

    def test_jwt_rejected(self, paseto_maker, jwt_maker):
        """Test a token from the other backend is rejected."""
        token = jwt_maker.generate_token("user123", timedelta(minutes=5))

        with pytest.raises(InvalidTokenError):
            paseto_maker.validate_token(token)

    def test_rejection_logged_without_secrets(self, paseto_maker, paseto_key, caplog):
        """Test a rejected token logs the reason at DEBUG but not the key or token."""
        token = PasetoMaker("abcdefghijklmnopqrstuvwxyz012345").generate_token("user123", timedelta(minutes=5))

        with caplog.at_level("DEBUG", logger="tokenmaker.modules.token.paseto_maker"):
            with pytest.raises(InvalidTokenError):
                paseto_maker.validate_token(token)

        records = [r for r in caplog.records if r.name == "tokenmaker.modules.token.paseto_maker"]
        assert records
        assert all(r.levelname == "DEBUG" for r in records)
        assert "Rejected PASETO token" in caplog.text
        assert paseto_key not in caplog.text
        assert token not in caplog.text

    def test_non_json_payload(self, paseto_maker, paseto_key):
        """Test an authentic token with a non-JSON body is malformed."""
        token = encrypt_raw(paseto_key, b"hello world")

        with pytest.raises(InvalidTokenError):
            paseto_maker.validate_token(token)

    def test_missing_field_payload(self, paseto_maker, paseto_key):
        """Test an authentic token missing payload fields is malformed."""
        body = json.dumps({"id": str(uuid4()), "username": "user123"}).encode("utf-8")
        token = encrypt_raw(paseto_key, body)

        with pytest.raises(InvalidTokenError):
            paseto_maker.validate_token(token)
