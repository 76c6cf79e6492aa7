"""
SiteCMS Backend: Schema Manager
================================

What:  Makes sure every table and column the application needs exists in
       the data file, on every startup.
How:   1. `Base.metadata.create_all` creates any missing table (existing
          tables are left untouched).
       2. For each optional column introduced after the first release, the
          live column set is read with the SQLAlchemy inspector and, when
          the column is missing, added in place through alembic's
          `Operations.add_column` (ALTER TABLE ... ADD COLUMN).
Who:   Called from the application lifespan before the seed loader.

Guarantees:
    - Additive only: tables and columns are never dropped or renamed.
    - Idempotent: a second run finds nothing to add and changes nothing.
    - A failure while checking or adding one column is logged and skipped;
      startup continues with the schema the data file already has.
    - A failure to create a table is NOT caught and aborts startup.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import Column, Connection, Text, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from sitecms.database import Base

# Registers the tables on Base.metadata
from sitecms.models.service import Service  # noqa: F401
from sitecms.models.team import TeamMember  # noqa: F401
from sitecms.models.user import DEFAULT_ROLE, User  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionalColumn:
    """A column that older data files may lack."""

    table: str
    name: str
    default: Optional[str] = None  # SQL literal, e.g. "'editor'"

    def build(self) -> Column:
        # A fresh Column per call: alembic attaches it to a throwaway Table
        server_default = text(self.default) if self.default is not None else None
        return Column(self.name, Text, server_default=server_default)


# Order matches the order the columns were introduced
OPTIONAL_COLUMNS: List[OptionalColumn] = [
    OptionalColumn("users", "role", default=f"'{DEFAULT_ROLE}'"),
    OptionalColumn("services", "file_url"),
    OptionalColumn("team", "icon"),
]


def _add_column_if_missing(connection: Connection, column: OptionalColumn) -> bool:
    existing = {col["name"] for col in inspect(connection).get_columns(column.table)}
    if column.name in existing:
        return False

    operations = Operations(MigrationContext.configure(connection))
    operations.add_column(column.table, column.build())
    return True


async def ensure_schema(
    engine: AsyncEngine,
    optional_columns: Optional[List[OptionalColumn]] = None,
) -> List[Tuple[str, str]]:
    """
    Create missing tables, then add missing optional columns.

    Args:
        engine:            Engine bound to the data file
        optional_columns:  Override of OPTIONAL_COLUMNS (tests)

    Returns:
        (table, column) pairs that were added during this run. Empty when the
        schema was already current.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    added: List[Tuple[str, str]] = []
    for column in optional_columns if optional_columns is not None else OPTIONAL_COLUMNS:
        try:
            async with engine.begin() as conn:
                was_added = await conn.run_sync(_add_column_if_missing, column)
        except SQLAlchemyError as e:
            logger.error(
                "Error checking/adding %s column to %s table: %s",
                column.name,
                column.table,
                str(e),
            )
            continue

        if was_added:
            logger.info("Added %s column to %s table", column.name, column.table)
            added.append((column.table, column.name))

    return added
