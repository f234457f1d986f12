"""Database Session Manager — error tagging, rollback and health checks.

Tests:
    - Constraint violations surface as DatabaseConflictError
    - Operational failures → DatabaseConnectionError (503), pool or asyncio timeouts →
      DatabaseTimeoutError (504), other driver errors → plain DatabaseError (500)
    - Other SQL failures surface as DatabaseError subclasses, never raw SQLAlchemy errors
    - Non-database exceptions pass through untouched
    - health_check() reports connectivity; missing_tables() compares against the ORM
"""

import asyncio

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DataError, OperationalError, TimeoutError as PoolTimeoutError

from librario.core.errors import (
    DatabaseConflictError, DatabaseConnectionError, DatabaseError,
    DatabaseTimeoutError,
)
from librario.models.user import User


async def test_unique_violation_is_tagged_conflict(db_manager):
    async with db_manager.session("seed") as s:
        s.add(User(username="ana", password_hash="x"))
        await s.commit()

    with pytest.raises(DatabaseConflictError) as exc_info:
        async with db_manager.session("create_user") as s:
            s.add(User(username="ana", password_hash="y"))
            await s.commit()
    assert exc_info.value.operation == "create_user"
    assert exc_info.value.http_status == 409


async def test_failed_statement_maps_to_database_error(db_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with db_manager.session("broken") as s:
            await s.execute(text("SELECT * FROM no_such_table"))
    assert "no_such_table" not in exc_info.value.message


async def test_session_usable_after_conflict(db_manager):
    async with db_manager.session() as s:
        s.add(User(username="ana", password_hash="x"))
        await s.commit()
    with pytest.raises(DatabaseConflictError):
        async with db_manager.session() as s:
            s.add(User(username="ana", password_hash="x"))
            await s.commit()

    async with db_manager.session() as s:
        count = (await s.execute(text("SELECT COUNT(*) FROM users"))).scalar_one()
    assert count == 1


async def test_non_database_errors_propagate(db_manager):
    with pytest.raises(KeyError):
        async with db_manager.session():
            raise KeyError("not a db problem")


async def test_health_check_ok(db_manager):
    assert await db_manager.health_check() is True


@pytest.mark.parametrize("raised, expected, status", [
    (OperationalError("SELECT 1", {}, Exception("connection refused")),
     DatabaseConnectionError, 503),
    (PoolTimeoutError("QueuePool limit reached"), DatabaseTimeoutError, 504),
    (asyncio.TimeoutError(), DatabaseTimeoutError, 504),
])
async def test_driver_failures_are_tagged(db_manager, raised, expected, status):
    with pytest.raises(expected) as exc_info:
        async with db_manager.session("list_books"):
            raise raised
    assert exc_info.value.http_status == status
    assert exc_info.value.operation == "list_books"
    assert "refused" not in exc_info.value.message


async def test_other_driver_errors_are_generic_500(db_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with db_manager.session("create_book"):
            raise DataError("INSERT", {}, Exception("integer out of range"))
    assert type(exc_info.value) is DatabaseError
    assert exc_info.value.http_status == 500
    assert "out of range" not in exc_info.value.message


async def test_missing_tables_empty_for_full_schema(db_manager):
    assert await db_manager.missing_tables() == []


async def test_missing_tables_lists_dropped_table(db_manager, test_engine):
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE reviews"))
    assert await db_manager.missing_tables() == ["reviews"]
