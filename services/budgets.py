"""Budget service for database operations."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from logger import get_logger
from models.budget import Budget
from models.forms import BudgetForm, parse_form
from models.money import to_money
from services.authorization import require_owner

logger = get_logger()

_BUDGET_SELECT_FIELDS = """id, user_id, name, amount, month, year, created_at,
       updated_at, category_name, description"""


class BudgetService:
    """Service for managing monthly budgets."""

    def __init__(self, db_manager):
        """Initialize the budget service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def create(self, user, form_data: dict) -> Budget:
        """Create a budget for a user.

        Args:
            user: The owning user.
            form_data: Keys name, amount, month, year, category_name and
                description.

        Returns:
            The created Budget.

        Raises:
            ValidationError: If the form data is invalid.
        """
        form = parse_form(BudgetForm, form_data)
        created_at = datetime.now().replace(microsecond=0)
        amount = to_money(form.amount)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO budgets (user_id, name, amount, month, year, created_at,
                    category_name, description)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    form.name,
                    str(amount),
                    form.month,
                    form.year,
                    created_at.isoformat(),
                    form.category_name,
                    form.description,
                ),
            )
            conn.commit()
            budget_id = cursor.lastrowid

        logger.info(
            f"Created budget '{form.name}' for {form.year:04d}-{form.month:02d} "
            f"(ID: {budget_id})"
        )

        return Budget(
            id=budget_id,
            user_id=user.id,
            name=form.name,
            amount=amount,
            month=form.month,
            year=form.year,
            created_at=created_at,
            category_name=form.category_name,
            description=form.description,
        )

    def update(self, budget_id: int, user, form_data: dict) -> Budget:
        """Replace every editable field of a budget.

        Raises:
            NotFoundError: If the budget does not exist.
            AccessDeniedError: If it belongs to another user.
            ValidationError: If the form data is invalid.
        """
        budget = self.get_owned(budget_id, user)
        form = parse_form(BudgetForm, form_data)
        updated_at = datetime.now().replace(microsecond=0)
        amount = to_money(form.amount)

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                UPDATE budgets
                SET name = ?, amount = ?, month = ?, year = ?, updated_at = ?,
                    category_name = ?, description = ?
                WHERE id = ?
                """,
                (
                    form.name,
                    str(amount),
                    form.month,
                    form.year,
                    updated_at.isoformat(),
                    form.category_name,
                    form.description,
                    budget_id,
                ),
            )
            conn.commit()

        logger.info(f"Updated budget {budget_id}")

        return Budget(
            id=budget_id,
            user_id=budget.user_id,
            name=form.name,
            amount=amount,
            month=form.month,
            year=form.year,
            created_at=budget.created_at,
            updated_at=updated_at,
            category_name=form.category_name,
            description=form.description,
        )

    def delete(self, budget_id: int, user) -> bool:
        """Delete a budget the user owns.

        Raises:
            NotFoundError: If the budget does not exist.
            AccessDeniedError: If it belongs to another user.
        """
        self.get_owned(budget_id, user)

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        logger.info(f"Deleted budget {budget_id}")
        return deleted

    def find(self, budget_id: int) -> Optional[Budget]:
        """Get a single budget by ID, regardless of owner.

        Returns:
            Budget object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_BUDGET_SELECT_FIELDS} FROM budgets WHERE id = ?",
                (budget_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_budget(row)
            return None

    def get_owned(self, budget_id: int, user) -> Budget:
        """Get a budget the user owns.

        Raises:
            NotFoundError: If the budget does not exist.
            AccessDeniedError: If it belongs to another user.
        """
        return require_owner(user, self.find(budget_id), "Budget", budget_id)

    def find_by_user(self, user_id: int) -> List[Budget]:
        """Get all of a user's budgets, most recent period first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_BUDGET_SELECT_FIELDS}
                FROM budgets
                WHERE user_id = ?
                ORDER BY year DESC, month DESC, name
                """,
                (user_id,),
            )
            return [self._row_to_budget(row) for row in cursor.fetchall()]

    def find_by_user_and_month(
        self, user_id: int, year: int, month: int
    ) -> List[Budget]:
        """Get a user's budgets for one calendar month, ordered by name."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_BUDGET_SELECT_FIELDS}
                FROM budgets
                WHERE user_id = ? AND year = ? AND month = ?
                ORDER BY name, id
                """,
                (user_id, year, month),
            )
            return [self._row_to_budget(row) for row in cursor.fetchall()]

    def find_by_user_and_date_range(
        self, user_id: int, start: date, end: date
    ) -> List[Budget]:
        """Get a user's budgets whose month falls within [start, end).

        Membership is decided at month granularity: a budget for (year, month)
        is included when (start.year, start.month) <= (year, month) and
        (year, month) < (end.year, end.month).

        Returns:
            List of Budget objects in chronological order, then by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_BUDGET_SELECT_FIELDS}
                FROM budgets
                WHERE user_id = ?
                  AND (year > ? OR (year = ? AND month >= ?))
                  AND (year < ? OR (year = ? AND month < ?))
                ORDER BY year, month, name, id
                """,
                (
                    user_id,
                    start.year,
                    start.year,
                    start.month,
                    end.year,
                    end.year,
                    end.month,
                ),
            )
            rows = cursor.fetchall()

        logger.debug(
            f"Loaded {len(rows)} budget(s) for user {user_id} in [{start}, {end})"
        )
        return [self._row_to_budget(row) for row in rows]

    def _row_to_budget(self, row: tuple) -> Budget:
        """Convert a database row to a Budget object."""
        return Budget(
            id=row[0],
            user_id=row[1],
            name=row[2],
            amount=Decimal(row[3]),
            month=row[4],
            year=row[5],
            created_at=datetime.fromisoformat(row[6]),
            updated_at=datetime.fromisoformat(row[7]) if row[7] else None,
            category_name=row[8],
            description=row[9],
        )
