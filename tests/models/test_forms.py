import pytest
from datetime import date
from decimal import Decimal

from errors import ValidationError
from models.forms import BudgetForm, RegistrationForm, TransactionForm, parse_form
from models.money import to_money
from tools.periods import resolve_month


class TestParseForm:
    """Tests for form validation."""

    def test_transaction_form_coerces_strings(self):
        """Test that command line strings become typed values."""
        form = parse_form(
            TransactionForm,
            {
                "title": "  Lunch  ",
                "amount": "12.5",
                "type": "expense",
                "transaction_date": "2024-03-15",
                "category_id": "4",
                "notes": "   ",
            },
        )

        assert form.title == "Lunch"
        assert form.amount == Decimal("12.5")
        assert form.transaction_date == date(2024, 3, 15)
        assert form.category_id == 4
        assert form.notes is None

    def test_collects_every_field_error(self):
        """Test that each invalid field gets its own message."""
        with pytest.raises(ValidationError) as exc_info:
            parse_form(TransactionForm, {"title": "", "amount": "abc"})

        errors = exc_info.value.field_errors
        assert {"title", "amount", "type", "transaction_date", "category_id"} <= set(
            errors
        )

    def test_budget_amount_may_be_zero(self):
        """Test that a zero budget passes validation."""
        form = parse_form(
            BudgetForm, {"name": "Zero", "amount": "0", "month": 1, "year": 2024}
        )

        assert form.amount == Decimal("0")

    def test_budget_year_matches_selectable_months(self):
        """Test that a budget can only be saved for a year the CLI can list."""
        form = parse_form(
            BudgetForm, {"name": "Far", "amount": "1", "month": 12, "year": 9998}
        )
        assert resolve_month(form.year, form.month, date(2024, 3, 20)) == (9998, 12)

        with pytest.raises(ValidationError) as exc_info:
            parse_form(
                BudgetForm, {"name": "Far", "amount": "1", "month": 1, "year": 9999}
            )
        assert "year" in exc_info.value.field_errors

        with pytest.raises(ValidationError):
            resolve_month(9999, 1, date(2024, 3, 20))

    def test_registration_email_is_validated(self):
        """Test that the email must be a well-formed address."""
        data = {
            "email": "carol@",
            "first_name": "Carol",
            "last_name": "Smith",
            "password": "secret123",
            "confirm_password": "secret123",
        }
        with pytest.raises(ValidationError) as exc_info:
            parse_form(RegistrationForm, data)
        assert "email" in exc_info.value.field_errors

        data["email"] = "carol@example.com"
        assert parse_form(RegistrationForm, data).email == "carol@example.com"

    def test_registration_email_length_is_limited(self):
        local = "a" * 64
        domain = ".".join(["b" * 60] * 2) + ".com"
        data = {
            "email": f"{local}@{domain}",
            "first_name": "Carol",
            "last_name": "Smith",
            "password": "secret123",
            "confirm_password": "secret123",
        }

        with pytest.raises(ValidationError) as exc_info:
            parse_form(RegistrationForm, data)

        assert "email" in exc_info.value.field_errors

    def test_registration_password_fits_bcrypt(self):
        """Test that passwords longer than 72 bytes are rejected."""
        password = "é" * 40
        data = {
            "email": "carol@example.com",
            "first_name": "Carol",
            "last_name": "Smith",
            "password": password,
            "confirm_password": password,
        }

        with pytest.raises(ValidationError) as exc_info:
            parse_form(RegistrationForm, data)

        assert "72 bytes" in exc_info.value.field_errors["password"]

    def test_error_message_lists_fields(self):
        """Test the exception text names the offending fields."""
        with pytest.raises(ValidationError, match="month"):
            parse_form(
                BudgetForm, {"name": "X", "amount": "1", "month": 13, "year": 2024}
            )


class TestToMoney:
    """Tests for to_money."""

    def test_quantizes_to_cents(self):
        assert str(to_money("12.5")) == "12.50"
        assert str(to_money(3)) == "3.00"

    def test_rounds_half_up(self):
        assert to_money(Decimal("0.005")) == Decimal("0.01")

    def test_refuses_floats(self):
        with pytest.raises(TypeError):
            to_money(0.1)
