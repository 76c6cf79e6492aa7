# Repositories package init
"""
SiteCMS Backend: Repository Layer
==================================

What:  One repository object per collection, wrapping the request's
       AsyncSession with the statements that collection needs.
How:   Route handlers receive repositories through FastAPI dependencies
       (see sitecms/dependencies.py); the seed loader builds them around
       its own transactional session.

Repository Inventory:
    - UserRepository:     users (credentials lookup, unique usernames)
    - ServiceRepository:  services
    - TeamRepository:     team members

Driver errors are translated here into application exceptions
(ValidationError for a username collision, StorageError for the rest).
"""

from sitecms.repositories.base import Repository
from sitecms.repositories.services import ServiceRepository
from sitecms.repositories.team import TeamRepository
from sitecms.repositories.users import UserRepository

__all__ = ["Repository", "ServiceRepository", "TeamRepository", "UserRepository"]
