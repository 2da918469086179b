"""
Credential hashing and token signing.

argon2 digests for passwords, HS256 JWTs for bearer tokens. Tokens carry
{sub: user_id, role} plus iat/exp.
"""

import re
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from .config import config

JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_SECONDS = 24 * 3600

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

_hasher = PasswordHasher()


class InvalidTokenError(Exception):
    """Token is malformed, tampered with, or expired."""


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(digest: str, password: str) -> bool:
    """Check a password against its digest. Never raises on mismatch."""
    try:
        return _hasher.verify(digest, password)
    except (VerificationError, InvalidHashError):
        return False


def parse_expires_in(value: str) -> int:
    """Convert '<n>[smhd]' to seconds; anything else means 24 hours."""
    match = re.fullmatch(r"(\d+)([smhd])", value.strip()) if value else None
    if not match:
        return DEFAULT_EXPIRES_SECONDS
    return int(match.group(1)) * _UNIT_SECONDS[match.group(2)]


def sign_token(claims: dict, secret: str | None = None, expires_in: str | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=parse_expires_in(expires_in or config.JWT_EXPIRES_IN))
    return jwt.encode(payload, secret or config.JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str, secret: str | None = None) -> dict:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        InvalidTokenError: If verification fails for any reason
    """
    try:
        return jwt.decode(token, secret or config.JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e
