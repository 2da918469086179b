"""
Auth service: signup and login.
"""

import logging

from ..database import Database, DBUser, DuplicateEmailError
from ..exceptions import AppError
from ..security import hash_password, sign_token, verify_password

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Service for account creation and credential checks."""

    def __init__(self, db: Database):
        self.db = db

    def signup(self, name: str, email: str, password: str, role: str) -> DBUser:
        """
        Register a new user.

        Raises:
            AppError: 409 if the email is already registered
        """
        if self.db.get_user_by_email(email):
            raise AppError.conflict("A user with this email already exists")

        try:
            user = self.db.add_user(name, email, hash_password(password), role)
        except DuplicateEmailError:
            # Lost a race with a concurrent signup for the same email
            raise AppError.conflict("A user with this email already exists")

        logger.info(f"Registered {role} {user.id}")
        return user

    def login(self, email: str, password: str) -> tuple[str, DBUser]:
        """
        Check credentials and issue a token.

        Returns:
            (token, user)

        Raises:
            AppError: 401 with an identical message for any credential failure
        """
        user = self.db.get_user_by_email(email)
        if not user or not verify_password(user.password, password):
            raise AppError.unauthorized(INVALID_CREDENTIALS)

        token = sign_token({"sub": user.id, "role": user.role})
        return token, user
