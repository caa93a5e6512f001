"""User service for registration and lookup."""

import json
from datetime import datetime
from typing import Optional

import bcrypt

from errors import ValidationError
from logger import get_logger
from models.forms import RegistrationForm, parse_form
from models.user import User

logger = get_logger()

BCRYPT_ROUNDS = 12

_USER_SELECT_FIELDS = (
    "id, email, password_hash, first_name, last_name, roles, created_at"
)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt and a fresh salt."""
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash.

    A stored value that is not a bcrypt hash never verifies.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


class UserService:
    """Service for managing users."""

    def __init__(self, db_manager):
        """Initialize the user service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def register(self, form_data: dict) -> User:
        """Register a new user from raw form data.

        Args:
            form_data: Keys email, first_name, last_name, password and
                confirm_password.

        Returns:
            The created User.

        Raises:
            ValidationError: If a field is missing or invalid, the passwords
                differ, or the email is already registered.
        """
        form = parse_form(RegistrationForm, form_data)

        if self.find_by_email(form.email):
            raise ValidationError(
                "Registration failed.",
                {"email": "This email address is already in use."},
            )

        created_at = datetime.now().replace(microsecond=0)
        roles = ["ROLE_USER"]
        password_hash = hash_password(form.password)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (email, password_hash, first_name, last_name, roles, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    form.email,
                    password_hash,
                    form.first_name,
                    form.last_name,
                    json.dumps(roles),
                    created_at.isoformat(),
                ),
            )
            conn.commit()
            user_id = cursor.lastrowid

        logger.info(f"Registered user {form.email} (ID: {user_id})")

        return User(
            id=user_id,
            email=form.email,
            password_hash=password_hash,
            first_name=form.first_name,
            last_name=form.last_name,
            created_at=created_at,
            roles=roles,
        )

    def find(self, user_id: int) -> Optional[User]:
        """Get a single user by ID.

        Returns:
            User object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE id = ?", (user_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def find_by_email(self, email: str) -> Optional[User]:
        """Get a single user by email address.

        Returns:
            User object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_USER_SELECT_FIELDS} FROM users WHERE email = ?", (email,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def check_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    def _row_to_user(self, row: tuple) -> User:
        return User(
            id=row[0],
            email=row[1],
            password_hash=row[2],
            first_name=row[3],
            last_name=row[4],
            roles=json.loads(row[5]),
            created_at=datetime.fromisoformat(row[6]),
        )
