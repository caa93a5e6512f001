import pytest
from argparse import Namespace

from cli.session import current_user, form_from_args, selected_month
from errors import NotFoundError, ValidationError


class TestCurrentUser:
    """Tests for resolving the acting user."""

    def test_user_option(self, services, user):
        """Test that --user selects the user by email."""
        found = current_user(Namespace(user="alice@example.com"), services)

        assert found.id == user.id

    def test_falls_back_to_configured_user(self, services, user):
        """Test that the config's default user is used without --user."""
        services.config.default_user = "alice@example.com"

        assert current_user(Namespace(user=None), services).id == user.id

    def test_no_user_given(self, services):
        """Test that some user must be named."""
        with pytest.raises(ValidationError):
            current_user(Namespace(user=None), services)

    def test_unknown_user(self, services):
        """Test that an unregistered email is rejected."""
        with pytest.raises(NotFoundError):
            current_user(Namespace(user="nobody@example.com"), services)


class TestSelectedMonth:
    """Tests for the month chosen by --month/--year."""

    def test_defaults_to_injected_clock(self, services):
        """Test that the fixture clock (2024-03-20) supplies the default."""
        assert selected_month(Namespace(month=None, year=None), services) == (2024, 3)

    def test_explicit_month(self, services):
        assert selected_month(Namespace(month=12, year=2023), services) == (2023, 12)


class TestFormFromArgs:
    """Tests for building edit forms from arguments."""

    def test_given_options_override_current_values(self):
        args = Namespace(name="New", amount=None)

        data = form_from_args(args, ("name", "amount"), {"name": "Old", "amount": "5"})

        assert data == {"name": "New", "amount": "5"}
