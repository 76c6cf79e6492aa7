"""
FastAPI dependencies wiring repositories and services into route handlers.

Each request gets its own session (`get_db_session`) and repositories built
around it. Tests replace `get_db_session` and `get_file_service` through
`app.dependency_overrides`.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.database import get_db_session
from sitecms.repositories.services import ServiceRepository
from sitecms.repositories.team import TeamRepository
from sitecms.repositories.users import UserRepository
from sitecms.services.auth_service import Authenticator, PlaintextAuthenticator

# Commit before the response goes out, so a failed commit surfaces as a 500
DbSession = Depends(get_db_session, scope="function")


def get_user_repository(db: AsyncSession = DbSession) -> UserRepository:
    return UserRepository(db)


def get_service_repository(db: AsyncSession = DbSession) -> ServiceRepository:
    return ServiceRepository(db)


def get_team_repository(db: AsyncSession = DbSession) -> TeamRepository:
    return TeamRepository(db)


def get_authenticator(
    users: UserRepository = Depends(get_user_repository),
) -> Authenticator:
    return PlaintextAuthenticator(users)
