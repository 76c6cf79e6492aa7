"""
SiteCMS Backend: Schema Manager Tests
======================================

What:  Table creation, idempotence, and in-place column migration of data
       files written by older releases.
"""

import logging

import pytest
from sqlalchemy import text

from sitecms.services.schema_service import OptionalColumn, ensure_schema

TABLES = ("users", "services", "team")


async def schema_snapshot(engine):
    """Every CREATE statement plus PRAGMA table_info of each table."""
    async with engine.connect() as conn:
        master = await conn.execute(
            text("SELECT type, name, sql FROM sqlite_master ORDER BY type, name")
        )
        snapshot = {"master": [tuple(row) for row in master]}
        for table in TABLES:
            info = await conn.execute(text(f"PRAGMA table_info({table})"))
            snapshot[table] = [tuple(row) for row in info]
    return snapshot


async def column_names(engine, table):
    async with engine.connect() as conn:
        info = await conn.execute(text(f"PRAGMA table_info({table})"))
        return [row[1] for row in info]


async def create_legacy_tables(engine):
    """The tables as the first release created them, with one user row."""
    async with engine.begin() as conn:
        await conn.execute(text(
            "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "username TEXT UNIQUE, password TEXT, name TEXT)"
        ))
        await conn.execute(text(
            "CREATE TABLE services (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT, description TEXT, icon TEXT)"
        ))
        await conn.execute(text(
            "CREATE TABLE team (id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "name TEXT, title TEXT, image TEXT)"
        ))
        await conn.execute(text(
            "INSERT INTO users (username, password, name) VALUES ('old', 'pw', 'Old User')"
        ))
        await conn.execute(text(
            "INSERT INTO services (title, description, icon) VALUES ('Legacy', 'Kept', 'Leaf')"
        ))


class TestEnsureSchema:

    @pytest.mark.asyncio
    async def test_creates_all_tables(self, db_engine):
        added = await ensure_schema(db_engine)

        assert added == []
        assert await column_names(db_engine, "users") == ["id", "username", "password", "name", "role"]
        assert await column_names(db_engine, "services") == ["id", "title", "description", "icon", "file_url"]
        assert await column_names(db_engine, "team") == ["id", "name", "title", "image", "icon"]

    @pytest.mark.asyncio
    async def test_running_twice_is_identical(self, db_engine):
        await ensure_schema(db_engine)
        first = await schema_snapshot(db_engine)

        added = await ensure_schema(db_engine)
        second = await schema_snapshot(db_engine)

        assert added == []
        assert first == second

    @pytest.mark.asyncio
    async def test_ids_use_autoincrement(self, db_engine):
        await ensure_schema(db_engine)
        snapshot = await schema_snapshot(db_engine)

        create_sql = {name: sql for kind, name, sql in snapshot["master"] if kind == "table"}
        for table in TABLES:
            assert "AUTOINCREMENT" in create_sql[table].upper()


class TestColumnMigration:

    @pytest.mark.asyncio
    async def test_adds_missing_columns_to_legacy_tables(self, db_engine):
        await create_legacy_tables(db_engine)

        added = await ensure_schema(db_engine)

        assert added == [("users", "role"), ("services", "file_url"), ("team", "icon")]
        assert "role" in await column_names(db_engine, "users")
        assert "file_url" in await column_names(db_engine, "services")
        assert "icon" in await column_names(db_engine, "team")

    @pytest.mark.asyncio
    async def test_existing_rows_survive_migration(self, db_engine):
        await create_legacy_tables(db_engine)
        await ensure_schema(db_engine)

        async with db_engine.connect() as conn:
            user = (await conn.execute(
                text("SELECT username, password, name, role FROM users")
            )).one()
            service = (await conn.execute(
                text("SELECT title, description, icon, file_url FROM services")
            )).one()

        # New role column reads its declared default on existing rows
        assert tuple(user) == ("old", "pw", "Old User", "editor")
        assert tuple(service) == ("Legacy", "Kept", "Leaf", None)

    @pytest.mark.asyncio
    async def test_migration_then_rerun_is_identical(self, db_engine):
        await create_legacy_tables(db_engine)
        await ensure_schema(db_engine)
        first = await schema_snapshot(db_engine)

        assert await ensure_schema(db_engine) == []
        assert await schema_snapshot(db_engine) == first

    @pytest.mark.asyncio
    async def test_column_failure_is_logged_and_skipped(self, db_engine, caplog):
        columns = [
            OptionalColumn("no_such_table", "extra"),
            OptionalColumn("services", "subtitle"),
        ]

        with caplog.at_level(logging.ERROR, logger="sitecms.services.schema_service"):
            added = await ensure_schema(db_engine, optional_columns=columns)

        assert added == [("services", "subtitle")]
        assert "subtitle" in await column_names(db_engine, "services")
        assert any("no_such_table" in record.getMessage() for record in caplog.records)
