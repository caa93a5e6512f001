"""Ownership checks for user-scoped records."""

from typing import Optional, TypeVar

from errors import AccessDeniedError, NotFoundError
from logger import get_logger

logger = get_logger()

RecordT = TypeVar("RecordT")


def require_owner(user, record: Optional[RecordT], kind: str, record_id) -> RecordT:
    """Return the record if it exists and belongs to the user.

    This is the single place where access to a category, transaction or
    budget is decided.

    Args:
        user: The requesting user.
        record: The record as loaded from the store, or None.
        kind: Human readable record type, used in error messages.
        record_id: The ID that was looked up.

    Returns:
        The record unchanged.

    Raises:
        NotFoundError: If the record does not exist.
        AccessDeniedError: If the record belongs to another user.
    """
    if record is None:
        raise NotFoundError(f"{kind} with ID {record_id} not found")

    if record.user_id != user.id:
        logger.warning(
            f"User {user.id} denied access to {kind.lower()} {record_id} "
            f"owned by user {record.user_id}"
        )
        raise AccessDeniedError(f"Access denied to {kind.lower()} {record_id}")

    return record
