"""Category model for transaction categorization."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Category:
    """Represents a user-defined transaction category.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: ID of the owning user.
        name: Category name, unique per user by convention.
        type: 'income' or 'expense'.
        created_at: Creation timestamp.
        description: Optional description of what belongs in this category.
        color: Optional hex color such as '#E53935'.
        icon: Optional icon name.
    """

    id: int
    user_id: int
    name: str
    type: str
    created_at: datetime
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
