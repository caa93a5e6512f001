"""Database manager for SQLite connections and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir
from errors import StoreError


class DatabaseManager:
    """Manages database connections and paths.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Foreign key enforcement is switched on for every connection. Any
        SQLite failure while the connection is open becomes a StoreError,
        except integrity violations, which callers handle themselves
        (deleting a category that is still in use, for example).

        Yields:
            sqlite3.Connection: Database connection.

        Raises:
            StoreError: If the database cannot be opened or a statement fails.
            sqlite3.IntegrityError: If a write breaks a schema constraint.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(db_path)
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise StoreError(f"Unable to open database {db_path}: {e}") from e

        try:
            yield conn
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Database error in {db_path}: {e}") from e
        finally:
            conn.close()

    def get_db_path(self):
        return self.config.db_path

    def get_migrations_dir(self):
        return get_migrations_dir()
