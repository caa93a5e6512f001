"""Calendar month arithmetic for half-open date ranges."""

from datetime import date
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from errors import ValidationError

MIN_YEAR = 1900
# The exclusive end of a month must still be a valid date
MAX_YEAR = 9998


def month_start(day: date) -> date:
    """Return the first day of the month containing `day`."""
    return day.replace(day=1)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Get the half-open range covering one calendar month.

    Args:
        year: Year (e.g., 2024).
        month: Month (1-12).

    Returns:
        (first day of the month, first day of the following month).

    Example:
        month_bounds(2024, 12) == (date(2024, 12, 1), date(2025, 1, 1))
    """
    start = date(year, month, 1)
    return start, start + relativedelta(months=1)


def month_key(day: date) -> str:
    """Format the month containing `day` as 'YYYY-MM'."""
    return f"{day.year:04d}-{day.month:02d}"


def trailing_months(reference: date, count: int = 12) -> List[date]:
    """List the first day of `count` consecutive months ending at `reference`.

    Args:
        reference: Any day in the last month of the series.
        count: Number of months.

    Returns:
        First-of-month dates in ascending order; the last one is the
        reference month.
    """
    last = month_start(reference)
    return [last - relativedelta(months=offset) for offset in range(count - 1, -1, -1)]


def resolve_month(
    year: Optional[int], month: Optional[int], today: date
) -> Tuple[int, int]:
    """Fill in a missing year or month from `today`.

    Args:
        year: Requested year, or None for the current year.
        month: Requested month, or None for the current month.
        today: The injected current date.

    Returns:
        (year, month) tuple.

    Raises:
        ValidationError: If the month is outside 1-12 or the year is not
            a usable calendar year.
    """
    year = today.year if year is None else year
    month = today.month if month is None else month

    if not 1 <= month <= 12:
        raise ValidationError("Invalid period.", {"month": "Month must be 1-12."})
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError("Invalid period.", {"year": "Year is out of range."})

    return year, month
