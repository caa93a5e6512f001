"""Helper utilities for tests."""

from pathlib import Path
import sqlite3


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    for migration_file in sorted(migrations_dir.glob("*.sql")):
        with open(migration_file, "r") as f:
            conn.executescript(f.read())

    conn.commit()


def register_user(services, email: str, first_name: str = "Test"):
    """Register a user with a fixed valid password."""
    return services.users.register(
        {
            "email": email,
            "first_name": first_name,
            "last_name": "User",
            "password": "secret123",
            "confirm_password": "secret123",
        }
    )


def add_category(services, user, name: str, category_type: str = "expense", **extra):
    """Create a category for a user."""
    return services.categories.create(
        user, {"name": name, "type": category_type, **extra}
    )


def add_transaction(
    services, user, category, amount: str, transaction_type: str, day, title=None
):
    """Create a transaction for a user in a category."""
    return services.transactions.create(
        user,
        {
            "title": title or f"{category.name} {amount}",
            "amount": amount,
            "type": transaction_type,
            "transaction_date": day.isoformat(),
            "category_id": category.id,
        },
    )


def add_budget(
    services, user, name: str, amount: str, year: int, month: int, category_name=None
):
    """Create a budget for a user."""
    return services.budgets.create(
        user,
        {
            "name": name,
            "amount": amount,
            "year": year,
            "month": month,
            "category_name": category_name,
        },
    )
