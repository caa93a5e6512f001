"""Helpers shared by the CLI commands: the acting user and the month shown."""

from typing import Tuple

from errors import NotFoundError, ValidationError
from tools.periods import resolve_month


def current_user(args, services):
    """Resolve the user named by --user, or the configured default user.

    Raises:
        ValidationError: If no user is given at all.
        NotFoundError: If no user has that email.
    """
    email = getattr(args, "user", None) or services.config.default_user
    if not email:
        raise ValidationError(
            "No user given. Pass --user or set session.default_user in the config."
        )

    user = services.users.find_by_email(email)
    if not user:
        raise NotFoundError(f"No user registered with email {email}")
    return user


def selected_month(args, services) -> Tuple[int, int]:
    """Get (year, month) from --year/--month, defaulting to the injected clock."""
    return resolve_month(
        getattr(args, "year", None), getattr(args, "month", None), services.today()
    )


def add_period_arguments(parser) -> None:
    """Add --month and --year options to a subcommand parser."""
    parser.add_argument("--month", type=int, help="Month (1-12), default current")
    parser.add_argument("--year", type=int, help="Year, default current")


def form_from_args(args, fields, current=None) -> dict:
    """Build form data from parsed arguments.

    Edits replace every field, so values not given on the command line are
    taken from `current`, the record's existing values.
    """
    data = dict(current or {})
    for field in fields:
        value = getattr(args, field, None)
        if value is not None:
            data[field] = value
    return data


def format_money(amount) -> str:
    return f"{amount:,.2f}"
