import pytest
import sqlite3
from datetime import date

from errors import AccessDeniedError, NotFoundError, ValidationError
from tests.helpers import add_category, add_transaction


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category(self, services, user):
        """Test creating a category with every field."""
        category = services.categories.create(
            user,
            {
                "name": "Groceries",
                "type": "expense",
                "description": "Food and groceries",
                "color": "#E53935",
                "icon": "cart",
            },
        )

        assert category.id is not None
        assert category.user_id == user.id
        assert category.name == "Groceries"
        assert category.type == "expense"
        assert category.description == "Food and groceries"
        assert category.color == "#E53935"
        assert category.icon == "cart"

    def test_create_category_without_optional_fields(self, services, user):
        """Test that blank optional fields are stored as None."""
        category = services.categories.create(
            user, {"name": "Utilities", "type": "expense", "description": ""}
        )

        found = services.categories.find(category.id)
        assert found.description is None
        assert found.color is None
        assert found.icon is None

    def test_create_rejects_invalid_type(self, services, user):
        """Test that the type must be income or expense."""
        with pytest.raises(ValidationError) as exc_info:
            services.categories.create(user, {"name": "Gifts", "type": "transfer"})

        assert "type" in exc_info.value.field_errors

    def test_create_rejects_invalid_color(self, services, user):
        """Test that the color must be a #RRGGBB hex string."""
        with pytest.raises(ValidationError) as exc_info:
            services.categories.create(
                user, {"name": "Gifts", "type": "expense", "color": "red"}
            )

        assert "color" in exc_info.value.field_errors
        assert services.categories.find_all(user.id) == []

    def test_find_all_is_per_user_and_sorted(self, services, user, other_user):
        """Test that find_all returns only the user's categories, by name."""
        add_category(services, user, "Zebra")
        add_category(services, user, "Alpha")
        add_category(services, other_user, "Beta")

        categories = services.categories.find_all(user.id)

        assert [c.name for c in categories] == ["Alpha", "Zebra"]

    def test_find_by_type(self, services, user):
        """Test filtering categories by type."""
        add_category(services, user, "Salary", "income")
        add_category(services, user, "Food", "expense")

        incomes = services.categories.find_by_type(user.id, "income")

        assert [c.name for c in incomes] == ["Salary"]

    def test_find_by_name_is_scoped_and_case_sensitive(self, services, user, other_user):
        """Test name lookup is per user and case-sensitive."""
        add_category(services, other_user, "Shopping")
        mine = add_category(services, user, "Shopping")

        assert services.categories.find_by_name(user.id, "Shopping").id == mine.id
        assert services.categories.find_by_name(user.id, "shopping") is None

    def test_update_replaces_all_fields(self, services, user):
        """Test that an edit rewrites every field."""
        category = add_category(
            services, user, "Old", description="Old description", color="#000000"
        )

        updated = services.categories.update(
            category.id, user, {"name": "New", "type": "income"}
        )

        assert updated.name == "New"
        assert updated.type == "income"
        found = services.categories.find(category.id)
        assert found.name == "New"
        assert found.description is None
        assert found.color is None

    def test_update_other_users_category_is_denied(self, services, user, other_user):
        """Test that a user cannot edit someone else's category."""
        category = add_category(services, other_user, "Theirs")

        with pytest.raises(AccessDeniedError):
            services.categories.update(
                category.id, user, {"name": "Mine", "type": "expense"}
            )

        assert services.categories.find(category.id).name == "Theirs"

    def test_update_nonexistent_category_raises_not_found(self, services, user):
        """Test that updating a missing category raises NotFoundError."""
        with pytest.raises(NotFoundError, match="Category with ID 9999 not found"):
            services.categories.update(9999, user, {"name": "X", "type": "expense"})

    def test_delete_category(self, services, user):
        """Test deleting a category."""
        category = add_category(services, user, "ToDelete")

        assert services.categories.delete(category.id, user) is True
        assert services.categories.find(category.id) is None

    def test_delete_other_users_category_is_denied(self, services, user, other_user):
        """Test that a user cannot delete someone else's category."""
        category = add_category(services, other_user, "Theirs")

        with pytest.raises(AccessDeniedError):
            services.categories.delete(category.id, user)

        assert services.categories.find(category.id) is not None

    def test_delete_category_in_use_raises_integrity_error(self, services, user):
        """Test that a category referenced by transactions cannot be deleted."""
        category = add_category(services, user, "Food")
        add_transaction(services, user, category, "5.00", "expense", date(2024, 3, 1))

        with pytest.raises(sqlite3.IntegrityError):
            services.categories.delete(category.id, user)
