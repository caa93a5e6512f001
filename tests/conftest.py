"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from datetime import date
from pathlib import Path

from config import Config, get_migrations_dir
from services.base import Services
from tests.helpers import register_user, run_migrations

TODAY = date(2024, 3, 20)


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """Use the cheapest bcrypt cost so registering users stays quick."""
    monkeypatch.setattr("services.users.BCRYPT_ROUNDS", 4)


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "monthwise",
        db_data_dir=tmp_path / "monthwise" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "monthwise" / "logs",
        default_user="",
        recent_limit=5,
        enable_reset=False,
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager with schema already set up.

    This fixture provides a DatabaseManager that uses an in-memory database
    with all migrations already applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        DatabaseManager: Database manager with schema ready.
    """
    run_migrations(test_db, get_migrations_dir())

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn):
            self.conn = conn

        def connect(self):
            """Return a context manager for the test connection."""
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            """Return a fake path for the test database."""
            return Path(":memory:")

        def get_migrations_dir(self):
            """Get the migrations directory path."""
            return get_migrations_dir()

    class _TestConnectionContext:
        """Context manager for test database connections."""

        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database and a fixed clock.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema, today=lambda: TODAY)


@pytest.fixture
def user(services):
    """A registered user."""
    return register_user(services, "alice@example.com", "Alice")


@pytest.fixture
def other_user(services):
    """A second registered user, used for ownership checks."""
    return register_user(services, "bob@example.com", "Bob")
