"""
SiteCMS Backend: User Repository
=================================

What:  Statements for the `users` table: credential lookup, username-based
       lookups for seeding, and CRUD with unique-username translation.

Username collisions are raised by SQLite as IntegrityError ("UNIQUE
constraint failed: users.username") and translated to ValidationError
("Username already exists") so the client receives a 400.
"""

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sitecms.exceptions import SiteCMSError, ValidationError
from sitecms.models.user import DEFAULT_ROLE, User
from sitecms.repositories.base import Repository

logger = logging.getLogger(__name__)


class UserRepository(Repository[User]):
    model = User
    resource_name = "user"

    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            result = await self.session.execute(
                select(User).where(User.username == username)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise self._storage_error("fetch", e)

    async def find_by_credentials(self, username: str, password: str) -> Optional[User]:
        """Exact, verbatim match on both columns."""
        try:
            result = await self.session.execute(
                select(User).where(User.username == username, User.password == password)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise self._storage_error("fetch", e)

    async def create_user(
        self,
        username: str,
        password: str,
        name: Optional[str],
        role: Optional[str] = None,
    ) -> User:
        return await self.create(
            username=username,
            password=password,
            name=name,
            role=role or DEFAULT_ROLE,
        )

    async def update_user(
        self,
        user_id: int,
        username: str,
        name: Optional[str],
        role: Optional[str],
        password: Optional[str] = None,
    ) -> int:
        """
        Overwrite username, name and role. The password column is only
        written when a non-empty password is given.
        """
        values = {"username": username, "name": name, "role": role}
        if password:
            values["password"] = password
        return await self.update(user_id, values)

    async def set_role(self, username: str, role: str) -> int:
        try:
            result = await self.session.execute(
                update(User)
                .where(User.username == username)
                .values(role=role)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            raise self._storage_error("update", e)
        return result.rowcount

    def _integrity_error(self, action: str, exc: IntegrityError) -> SiteCMSError:
        if "UNIQUE" in str(exc.orig).upper():
            logger.warning("Rejected %s: username already exists", action)
            return ValidationError(
                message="Username already exists",
                field="username",
            )
        return super()._integrity_error(action, exc)
