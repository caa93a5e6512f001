"""Budget model for monthly spending limits."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Budget:
    """A spending limit for one calendar month.

    The category is referenced by free-text name, not by id. It is matched
    against category names when statistics are computed, so renaming a
    category leaves the budget pointing at the old name.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: ID of the owning user.
        name: Display name, e.g. 'Food Budget'.
        amount: Limit for the month.
        month: Calendar month (1-12).
        year: Calendar year.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last edit, if any.
        category_name: Name of the category whose expenses count against it.
        description: Optional free-text description.
    """

    id: int
    user_id: int
    name: str
    amount: Decimal
    month: int
    year: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    category_name: Optional[str] = None
    description: Optional[str] = None

    @property
    def period(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
