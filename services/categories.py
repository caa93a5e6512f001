"""Category service for database operations."""

from datetime import datetime
from typing import List, Optional

from logger import get_logger
from models.category import Category
from models.forms import CategoryForm, parse_form
from services.authorization import require_owner

logger = get_logger()

_CATEGORY_SELECT_FIELDS = (
    "id, user_id, name, type, created_at, description, color, icon"
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, user_id: int) -> List[Category]:
        """Get all categories belonging to a user.

        Args:
            user_id: The owning user's ID.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ?
                ORDER BY name
                """,
                (user_id,),
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find_by_type(self, user_id: int, category_type: str) -> List[Category]:
        """Get a user's categories of one type ('income' or 'expense').

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ? AND type = ?
                ORDER BY name
                """,
                (user_id, category_type),
            )
            return [self._row_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID, regardless of owner.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def find_by_name(self, user_id: int, name: str) -> Optional[Category]:
        """Get a user's category by exact (case-sensitive) name.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_id = ? AND name = ?
                ORDER BY id
                """,
                (user_id, name),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def get_owned(self, category_id: int, user) -> Category:
        """Get a category the user owns.

        Raises:
            NotFoundError: If the category does not exist.
            AccessDeniedError: If it belongs to another user.
        """
        return require_owner(user, self.find(category_id), "Category", category_id)

    def create(self, user, form_data: dict) -> Category:
        """Create a new category for a user.

        Args:
            user: The owning user.
            form_data: Keys name, type, description, color and icon.

        Returns:
            The created Category object with id populated.

        Raises:
            ValidationError: If the form data is invalid.
        """
        form = parse_form(CategoryForm, form_data)
        created_at = datetime.now().replace(microsecond=0)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (user_id, name, type, created_at, description, color, icon)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    form.name,
                    form.type,
                    created_at.isoformat(),
                    form.description,
                    form.color,
                    form.icon,
                ),
            )
            conn.commit()
            category_id = cursor.lastrowid

        logger.info(f"Created category '{form.name}' (ID: {category_id})")

        return Category(
            id=category_id,
            user_id=user.id,
            name=form.name,
            type=form.type,
            created_at=created_at,
            description=form.description,
            color=form.color,
            icon=form.icon,
        )

    def update(self, category_id: int, user, form_data: dict) -> Category:
        """Replace every editable field of a category.

        Budgets referencing the old name are not renamed.

        Raises:
            NotFoundError: If the category does not exist.
            AccessDeniedError: If it belongs to another user.
            ValidationError: If the form data is invalid.
        """
        category = self.get_owned(category_id, user)
        form = parse_form(CategoryForm, form_data)

        with self.db_manager.connect() as conn:
            conn.execute(
                """
                UPDATE categories
                SET name = ?, type = ?, description = ?, color = ?, icon = ?
                WHERE id = ?
                """,
                (
                    form.name,
                    form.type,
                    form.description,
                    form.color,
                    form.icon,
                    category_id,
                ),
            )
            conn.commit()

        if form.name != category.name:
            logger.info(
                f"Renamed category '{category.name}' to '{form.name}'; "
                "budgets keep the old name"
            )

        return Category(
            id=category_id,
            user_id=category.user_id,
            name=form.name,
            type=form.type,
            created_at=category.created_at,
            description=form.description,
            color=form.color,
            icon=form.icon,
        )

    def delete(self, category_id: int, user) -> bool:
        """Delete a category the user owns.

        Returns:
            True if the category was deleted.

        Raises:
            NotFoundError: If the category does not exist.
            AccessDeniedError: If it belongs to another user.
            sqlite3.IntegrityError: If transactions still reference it.
        """
        self.get_owned(category_id, user)

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        logger.info(f"Deleted category {category_id}")
        return deleted

    def _row_to_category(self, row: tuple) -> Category:
        """Convert a database row to a Category object."""
        return Category(
            id=row[0],
            user_id=row[1],
            name=row[2],
            type=row[3],
            created_at=datetime.fromisoformat(row[4]),
            description=row[5],
            color=row[6],
            icon=row[7],
        )
