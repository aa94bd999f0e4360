"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
All cryptographic operations (bcrypt, JWT) execute for real.
Only the config boundary is stubbed with real Pydantic schema objects.
"""

from dataclasses import FrozenInstanceError
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from jose import jwt as jose_jwt

from explorer.backend.core.config_schema import JwtSchema
from explorer.backend.core.exceptions import AuthenticationError, ValidationError
from explorer.backend.core.security import (
    CurrentUser,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-testing-purposes"


@pytest.fixture
def jwt_config():
    """Real Pydantic JwtSchema with test values."""
    return JwtSchema(
        algorithm="HS256",
        access_token_expire_minutes=30,
        audience="test-api",
    )


@pytest.fixture
def _stub_config(jwt_config):
    """Stub the config boundary so security functions can resolve settings."""
    settings = SimpleNamespace(jwt_secret=TEST_JWT_SECRET)
    app_config = SimpleNamespace(security=SimpleNamespace(jwt=jwt_config))
    with (
        patch("explorer.backend.core.security.get_settings", return_value=settings),
        patch("explorer.backend.core.security.get_app_config", return_value=app_config),
    ):
        yield


# =============================================================================
# Password Hashing
# =============================================================================


class TestHashPassword:
    """Tests for password hashing, no mocks."""

    def test_returns_bcrypt_formatted_hash(self):
        result = hash_password("password123")
        assert result != "password123"
        assert result.startswith("$2b$")

    def test_same_password_produces_different_hashes(self):
        """Bcrypt salts each hash, so two calls must differ."""
        assert hash_password("identical") != hash_password("identical")

    def test_72_bytes_is_accepted(self):
        assert hash_password("p" * 72).startswith("$2b$")

    def test_longer_than_72_bytes_rejected(self):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            hash_password("p" * 80)

    def test_limit_counts_bytes_not_characters(self):
        # 40 two-byte characters
        with pytest.raises(ValidationError):
            hash_password("é" * 40)


class TestVerifyPassword:
    """Tests for password verification, no mocks."""

    def test_correct_password_verifies(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("correct-horse-battery-staple", hashed) is True

    def test_wrong_password_fails(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert verify_password("wrong-password", hashed) is False

    def test_round_trip_with_unicode(self):
        password = "contraseña-sécurité-пароль"
        assert verify_password(password, hash_password(password)) is True

    def test_over_long_password_never_matches(self):
        hashed = hash_password("p" * 72)
        assert verify_password("p" * 80, hashed) is False


# =============================================================================
# Identity
# =============================================================================


class TestCurrentUser:
    """Tests for the CurrentUser value object."""

    def test_is_immutable(self):
        user = CurrentUser(id="u1", username="alice", email="a@example.com")
        with pytest.raises(FrozenInstanceError):
            user.id = "u2"

    def test_equality_by_value(self):
        assert CurrentUser("u1", "alice", "a@x.io") == CurrentUser("u1", "alice", "a@x.io")


# =============================================================================
# JWT Access Tokens
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestCreateAccessToken:
    """Tests for JWT access token creation and decoding."""

    def test_round_trip_preserves_subject(self):
        payload = decode_token(create_access_token({"sub": "user-42"}))
        assert payload["sub"] == "user-42"

    def test_token_carries_type_and_audience(self):
        payload = decode_token(create_access_token({"sub": "user-1"}))
        assert payload["type"] == "access"
        assert payload["aud"] == "test-api"
        assert "exp" in payload

    def test_custom_expiration_delta(self):
        short = create_access_token({"sub": "u"}, expires_delta=timedelta(minutes=5))
        long = create_access_token({"sub": "u"}, expires_delta=timedelta(hours=24))
        assert decode_token(long)["exp"] > decode_token(short)["exp"]

    def test_does_not_mutate_input_data(self):
        data = {"sub": "user-1"}
        create_access_token(data)
        assert data == {"sub": "user-1"}


# =============================================================================
# Token Decoding, Failure Cases
# =============================================================================


@pytest.mark.usefixtures("_stub_config")
class TestDecodeToken:
    """Tests for token decoding failures."""

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            decode_token("not-a-jwt-token")
        assert exc_info.value.message == "Invalid or expired token"

    def test_tampered_token(self):
        token = create_access_token({"sub": "user-1"})
        with pytest.raises(AuthenticationError):
            decode_token(token[:-4] + "XXXX")

    def test_wrong_secret(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "access", "aud": "test-api"},
            "completely-different-secret",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_wrong_audience(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "access", "aud": "another-api"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_non_access_token_type(self):
        token = jose_jwt.encode(
            {"sub": "user-1", "type": "refresh", "aud": "test-api"},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_missing_subject(self):
        token = create_access_token({"role": "admin"})
        with pytest.raises(AuthenticationError):
            decode_token(token)

    def test_expired_token(self):
        token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError):
            decode_token(token)
