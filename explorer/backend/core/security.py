"""
Security Utilities.

Password hashing and JWT access tokens.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from explorer.backend.core.config import get_app_config, get_settings
from explorer.backend.core.exceptions import AuthenticationError, ValidationError
from explorer.backend.core.logging import get_logger
from explorer.backend.core.utils import utc_now

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True, slots=True)
class CurrentUser:
    """Authenticated identity resolved from a bearer token.

    Passed explicitly into every service call that acts on behalf of a user.
    """

    id: str
    username: str
    email: str


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Raises:
        ValidationError: If the password is longer than bcrypt accepts
    """
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Over-long input never matches."""
    encoded = plain_password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(
        encoded,
        hashed_password.encode("utf-8"),
    )


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode; callers put the user ID in "sub"
        expires_delta: Optional custom lifetime, defaults to security.yaml

    Returns:
        Encoded JWT token
    """
    jwt_config = get_app_config().security.jwt
    lifetime = expires_delta or timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode = data.copy()
    to_encode.update({
        "exp": utc_now() + lifetime,
        "type": "access",
        "aud": jwt_config.audience,
    })
    return jwt.encode(to_encode, get_settings().jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        AuthenticationError: If the token is malformed, expired, for another
            audience, or not an access token
    """
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token") from e

    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return payload
