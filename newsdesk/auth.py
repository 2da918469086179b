"""
Authentication and authorization dependencies.

Protected routes read a bearer JWT from the Authorization header:
1. Missing token -> 401 "Authentication required"
2. Bad or expired token -> 401 "Invalid or expired token"
3. Valid token with the wrong role -> 403

The article detail route uses get_optional_user instead, which treats any
missing or invalid token as a guest.
"""

from dataclasses import dataclass

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .exceptions import AppError
from .schemas import ROLES
from .security import InvalidTokenError, decode_token

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthUser:
    """Identity carried by a verified token."""
    id: str
    role: str


def _user_from_token(token: str) -> AuthUser:
    try:
        claims = decode_token(token)
    except InvalidTokenError:
        raise AppError.unauthorized("Invalid or expired token")

    user_id = claims.get("sub")
    role = claims.get("role")
    if not user_id or role not in ROLES:
        raise AppError.unauthorized("Invalid or expired token")
    return AuthUser(id=str(user_id), role=role)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme)
) -> AuthUser:
    """Require a valid bearer token."""
    if credentials is None:
        raise AppError.unauthorized("Authentication required")
    return _user_from_token(credentials.credentials)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme)
) -> AuthUser | None:
    """Return the caller if a valid token is present, otherwise None."""
    if credentials is None:
        return None
    try:
        return _user_from_token(credentials.credentials)
    except AppError:
        return None


def require_role(*roles: str):
    """Build a dependency that admits only the given roles."""

    def dependency(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role not in roles:
            raise AppError.forbidden("You do not have permission to access this resource")
        return user

    return dependency


require_author = require_role("author")
