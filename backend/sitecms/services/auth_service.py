"""
SiteCMS Backend: Authentication Service
========================================

What:  Checks login credentials against the users table.
How:   Route handlers depend on the `Authenticator` protocol; the only
       implementation, `PlaintextAuthenticator`, compares the submitted
       password to the stored one verbatim.

Security Note:
    Passwords are stored and compared in plain text. This matches the data
    already present in deployed data files. Replacing it (hashing on write,
    verifying on login) only needs a new Authenticator and a change to
    `get_authenticator` in sitecms/dependencies.py.

    There is no lockout, no rate limiting and no session or token: a
    successful login returns the public user record and nothing else.
"""

import logging
from typing import Optional, Protocol

from sitecms.exceptions import AuthError
from sitecms.models.user import User
from sitecms.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """Interface for credential verification."""

    async def authenticate(self, username: str, password: str) -> User:
        """Return the matching user or raise AuthError."""
        ...


class PlaintextAuthenticator:
    """Exact-equality match on username and password."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def find_user(self, username: str, password: str) -> Optional[User]:
        return await self.users.find_by_credentials(username, password)

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.find_user(username, password)
        if user is None:
            # Same error for unknown username and wrong password
            logger.warning("Failed login attempt for username=%s", username)
            raise AuthError()
        logger.info("User %s logged in", user.username)
        return user
