import sqlite3
import pytest
from datetime import date, datetime

from cli.migrate import apply_pending
from db.manager import DatabaseManager
from errors import StoreError
from models.user import User
from services.base import Services
from tests.helpers import add_category, add_transaction, register_user

MARCH = (date(2024, 3, 1), date(2024, 4, 1))


@pytest.fixture
def file_services(test_config):
    """Services backed by a migrated database file under tmp_path."""
    db_manager = DatabaseManager(test_config)
    apply_pending(db_manager)
    return Services(test_config, db_manager=db_manager)


class TestDatabaseManager:
    """Tests for DatabaseManager against real database files."""

    def test_connection_enforces_foreign_keys(self, test_config):
        with DatabaseManager(test_config).connect() as conn:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_unopenable_database_raises_store_error(self, test_config):
        """Test that a database path that is a directory is a store failure."""
        test_config.db_path.mkdir(parents=True)

        with pytest.raises(StoreError):
            with DatabaseManager(test_config).connect() as conn:
                conn.execute("SELECT name FROM sqlite_master").fetchall()

    def test_query_failure_raises_store_error(self, test_config):
        """Test that statistics over an unmigrated database fail as a store error."""
        services = Services(test_config)
        user = User(
            id=1,
            email="alice@example.com",
            password_hash="",
            first_name="Alice",
            last_name="User",
            created_at=datetime(2024, 1, 1),
        )

        with pytest.raises(StoreError, match="no such table"):
            services.statistics.compute_monthly_statistics(user, *MARCH)

    def test_store_error_keeps_sqlite_cause(self, test_config):
        with pytest.raises(StoreError) as exc_info:
            with DatabaseManager(test_config).connect() as conn:
                conn.execute("SELECT * FROM missing_table")

        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

    def test_integrity_errors_are_not_wrapped(self, file_services):
        """Test that deleting a category still in use raises IntegrityError."""
        user = register_user(file_services, "alice@example.com", "Alice")
        food = add_category(file_services, user, "Food")
        add_transaction(file_services, user, food, "12.50", "expense", date(2024, 3, 5))

        with pytest.raises(sqlite3.IntegrityError):
            file_services.categories.delete(food.id, user)

        assert file_services.categories.find(food.id) is not None

    def test_migrated_file_database_aggregates(self, file_services):
        user = register_user(file_services, "alice@example.com", "Alice")
        food = add_category(file_services, user, "Food")
        add_transaction(file_services, user, food, "12.50", "expense", date(2024, 3, 5))

        statistics = file_services.statistics.compute_monthly_statistics(user, *MARCH)

        assert str(statistics.balance.expense) == "12.50"
        assert apply_pending(file_services.db_manager) == []
