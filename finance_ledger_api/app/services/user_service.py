"""
Business logic for users: registration and login.

Passwords are hashed with ``core.security.hash_password`` before they
reach the store.  Login failures report the same message whether the
email is unknown or the password is wrong.
"""

import logging

from ..core.errors import ErrorKind, Result
from ..core.security import CredentialService, hash_password
from ..models import User
from ..stores.user_store import DuplicateEmailError, UserStore


logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    """Registers users and logs them in, returning bearer tokens."""

    def __init__(self, users: UserStore, credentials: CredentialService) -> None:
        self.users = users
        self.credentials = credentials

    def register(self, name: str, email: str, password: str) -> Result[str]:
        """Create a user and return a token for immediate use.

        Fails with ``CONFLICT`` if the email is already registered,
        including when a concurrent registration wins the race.
        """
        if self.users.find_by_email(email) is not None:
            logger.info("Registration rejected for %s: email in use", email)
            return Result.failure(ErrorKind.CONFLICT, EMAIL_IN_USE)
        try:
            user = self.users.save(
                User(id=None, name=name, email=email, password_hash=hash_password(password))
            )
        except DuplicateEmailError:
            logger.info("Registration rejected for %s: email in use", email)
            return Result.failure(ErrorKind.CONFLICT, EMAIL_IN_USE)
        logger.info("Registered user %s (%s)", user.id, user.email)
        return Result.success(self.credentials.issue_token(user.email))

    def login(self, email: str, password: str) -> Result[str]:
        if not self.credentials.verify(email, password):
            logger.info("Failed login for %s", email)
            return Result.failure(ErrorKind.UNAUTHENTICATED, INVALID_CREDENTIALS)
        return Result.success(self.credentials.issue_token(email))
