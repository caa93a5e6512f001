"""Transaction service for database operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from logger import get_logger
from models.forms import TransactionForm, parse_form
from models.money import to_money
from models.transaction import Transaction
from services.authorization import require_owner
from tools.periods import month_bounds

logger = get_logger()

# SQL Query Constants
_TRANSACTION_SELECT_FIELDS = """t.id, t.user_id, t.category_id, t.title, t.amount, t.type,
       t.transaction_date, t.created_at, t.updated_at, t.description, t.payment_method,
       t.notes, c.name, c.color"""

_TRANSACTION_FROM = "transactions t JOIN categories c ON c.id = t.category_id"


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db_manager, categories):
        """Initialize the transaction service.

        Args:
            db_manager: Database manager instance for database operations.
            categories: CategoryService used to resolve the owned category.
        """
        self.db_manager = db_manager
        self.categories = categories

    def create(self, user, form_data: dict) -> Transaction:
        """Create a transaction for a user.

        Args:
            user: The owning user.
            form_data: Keys title, amount, type, transaction_date, category_id,
                description, payment_method and notes.

        Returns:
            The created Transaction.

        Raises:
            ValidationError: If the form data is invalid.
            NotFoundError: If the category does not exist.
            AccessDeniedError: If the category belongs to another user.
        """
        form = parse_form(TransactionForm, form_data)
        category = self.categories.get_owned(form.category_id, user)
        created_at = datetime.now().replace(microsecond=0)
        amount = to_money(form.amount)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO transactions (user_id, category_id, title, amount, type,
                    transaction_date, created_at, description, payment_method, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    category.id,
                    form.title,
                    str(amount),
                    form.type,
                    form.transaction_date.isoformat(),
                    created_at.isoformat(),
                    form.description,
                    form.payment_method,
                    form.notes,
                ),
            )
            conn.commit()
            transaction_id = cursor.lastrowid

        logger.info(
            f"Created {form.type} transaction '{form.title}' of {amount} "
            f"(ID: {transaction_id})"
        )

        return Transaction(
            id=transaction_id,
            user_id=user.id,
            category_id=category.id,
            title=form.title,
            amount=amount,
            type=form.type,
            transaction_date=form.transaction_date,
            created_at=created_at,
            description=form.description,
            payment_method=form.payment_method,
            notes=form.notes,
            category_name=category.name,
            category_color=category.color,
        )

    def update(self, transaction_id: int, user, form_data: dict) -> Transaction:
        """Replace every editable field of a transaction.

        Raises:
            NotFoundError: If the transaction or category does not exist.
            AccessDeniedError: If either belongs to another user.
            ValidationError: If the form data is invalid.
        """
        transaction = self.get_owned(transaction_id, user)
        form = parse_form(TransactionForm, form_data)
        category = self.categories.get_owned(form.category_id, user)
        updated_at = datetime.now().replace(microsecond=0)
        amount = to_money(form.amount)

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                UPDATE transactions
                SET category_id = ?, title = ?, amount = ?, type = ?,
                    transaction_date = ?, updated_at = ?, description = ?,
                    payment_method = ?, notes = ?
                WHERE id = ?
                """,
                (
                    category.id,
                    form.title,
                    str(amount),
                    form.type,
                    form.transaction_date.isoformat(),
                    updated_at.isoformat(),
                    form.description,
                    form.payment_method,
                    form.notes,
                    transaction_id,
                ),
            )
            conn.commit()

        logger.info(f"Updated transaction {transaction_id}")

        return Transaction(
            id=transaction_id,
            user_id=transaction.user_id,
            category_id=category.id,
            title=form.title,
            amount=amount,
            type=form.type,
            transaction_date=form.transaction_date,
            created_at=transaction.created_at,
            updated_at=updated_at,
            description=form.description,
            payment_method=form.payment_method,
            notes=form.notes,
            category_name=category.name,
            category_color=category.color,
        )

    def delete(self, transaction_id: int, user) -> bool:
        """Delete a transaction the user owns.

        Raises:
            NotFoundError: If the transaction does not exist.
            AccessDeniedError: If it belongs to another user.
        """
        self.get_owned(transaction_id, user)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM transactions WHERE id = ?", (transaction_id,)
            )
            conn.commit()
            deleted = cursor.rowcount > 0

        logger.info(f"Deleted transaction {transaction_id}")
        return deleted

    def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID, regardless of owner.

        Returns:
            Transaction object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM {_TRANSACTION_FROM}
                WHERE t.id = ?
                """,
                (transaction_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_transaction(row)
            return None

    def get_owned(self, transaction_id: int, user) -> Transaction:
        """Get a transaction the user owns.

        Raises:
            NotFoundError: If the transaction does not exist.
            AccessDeniedError: If it belongs to another user.
        """
        return require_owner(
            user, self.find(transaction_id), "Transaction", transaction_id
        )

    def find_by_user_and_date_range(
        self, user_id: int, start: date, end: date
    ) -> List[Transaction]:
        """Get a user's transactions dated within [start, end).

        Args:
            user_id: The owning user's ID.
            start: First date included.
            end: First date excluded.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM {_TRANSACTION_FROM}
                WHERE t.user_id = ?
                  AND t.transaction_date >= ?
                  AND t.transaction_date < ?
                ORDER BY t.transaction_date DESC, t.id DESC
                """,
                (user_id, start.isoformat(), end.isoformat()),
            )
            rows = cursor.fetchall()

        logger.debug(
            f"Loaded {len(rows)} transaction(s) for user {user_id} "
            f"in [{start}, {end})"
        )
        return [self._row_to_transaction(row) for row in rows]

    def find_by_user_and_month(
        self, user_id: int, year: int, month: int
    ) -> List[Transaction]:
        """Get a user's transactions for one calendar month.

        Returns:
            List of Transaction objects ordered by date (newest first).
        """
        start, end = month_bounds(year, month)
        return self.find_by_user_and_date_range(user_id, start, end)

    def find_recent_by_user(self, user_id: int, limit: int = 10) -> List[Transaction]:
        """Get a user's latest transactions.

        Returns:
            Up to `limit` transactions, newest date first, then newest created.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_TRANSACTION_SELECT_FIELDS}
                FROM {_TRANSACTION_FROM}
                WHERE t.user_id = ?
                ORDER BY t.transaction_date DESC, t.created_at DESC, t.id DESC
                LIMIT ?
                """,
                (user_id, limit),
            )
            return [self._row_to_transaction(row) for row in cursor.fetchall()]

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            user_id=row[1],
            category_id=row[2],
            title=row[3],
            amount=Decimal(row[4]),
            type=row[5],
            transaction_date=date.fromisoformat(row[6]),
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]) if row[8] else None,
            description=row[9],
            payment_method=row[10],
            notes=row[11],
            category_name=row[12],
            category_color=row[13],
        )
