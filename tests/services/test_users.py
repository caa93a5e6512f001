import bcrypt
import pytest

from errors import ValidationError
from services.users import hash_password, verify_password


def _form(**overrides):
    data = {
        "email": "carol@example.com",
        "first_name": "Carol",
        "last_name": "Smith",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    data.update(overrides)
    return data


class TestUserService:
    """Tests for UserService."""

    def test_register_user(self, services):
        """Test registering a user with valid data."""
        user = services.users.register(_form())

        assert user.id is not None
        assert user.email == "carol@example.com"
        assert user.full_name == "Carol Smith"
        assert user.roles == ["ROLE_USER"]
        assert user.password_hash != "secret123"

    def test_register_persists_user(self, services):
        """Test that a registered user can be found again."""
        created = services.users.register(_form())

        found = services.users.find_by_email("carol@example.com")

        assert found is not None
        assert found.id == created.id
        assert found.roles == ["ROLE_USER"]
        assert services.users.find(created.id).email == "carol@example.com"

    def test_find_missing_user_returns_none(self, services):
        """Test that unknown ids and emails return None."""
        assert services.users.find(9999) is None
        assert services.users.find_by_email("nobody@example.com") is None

    @pytest.mark.parametrize(
        "field", ["email", "first_name", "last_name", "password"]
    )
    def test_register_requires_fields(self, services, field):
        """Test that every field is required."""
        with pytest.raises(ValidationError) as exc_info:
            services.users.register(_form(**{field: ""}))

        assert field in exc_info.value.field_errors

    def test_register_rejects_invalid_email(self, services):
        """Test that a malformed email is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            services.users.register(_form(email="not-an-email"))

        assert "valid email address" in exc_info.value.field_errors["email"]

    def test_register_rejects_short_password(self, services):
        """Test that passwords shorter than 6 characters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            services.users.register(_form(password="abc", confirm_password="abc"))

        assert "at least 6" in exc_info.value.field_errors["password"]

    def test_register_rejects_mismatched_passwords(self, services):
        """Test that the confirmation must match the password."""
        with pytest.raises(ValidationError) as exc_info:
            services.users.register(_form(confirm_password="different"))

        assert exc_info.value.message == "Passwords do not match."
        assert exc_info.value.field_errors == {}

    def test_register_rejects_duplicate_email(self, services):
        """Test that an email can only be registered once."""
        services.users.register(_form())

        with pytest.raises(ValidationError) as exc_info:
            services.users.register(_form(first_name="Other"))

        assert "already in use" in exc_info.value.field_errors["email"]

    def test_failed_registration_writes_nothing(self, services):
        """Test that a rejected form leaves no user behind."""
        with pytest.raises(ValidationError):
            services.users.register(_form(confirm_password="different"))

        assert services.users.find_by_email("carol@example.com") is None

    def test_check_password(self, services):
        """Test verifying a user's password."""
        user = services.users.register(_form())

        assert services.users.check_password(user, "secret123") is True
        assert services.users.check_password(user, "wrong-password") is False


class TestPasswordHashing:
    """Tests for the password hash helpers."""

    def test_hash_is_salted(self):
        """Test that hashing the same password twice gives different hashes."""
        first = hash_password("secret123")
        second = hash_password("secret123")

        assert first != second
        assert first.startswith("$2")
        assert verify_password("secret123", first) is True
        assert verify_password("secret123", second) is True

    def test_verify_matches_bcrypt_hash(self):
        """Test that hashes made directly with bcrypt verify."""
        stored = bcrypt.hashpw(b"secret123", bcrypt.gensalt(rounds=4)).decode("utf-8")

        assert verify_password("secret123", stored) is True
        assert verify_password("secret124", stored) is False

    def test_verify_rejects_malformed_hash(self):
        """Test that a stored value that is not a bcrypt hash never verifies."""
        assert verify_password("secret123", "plain-text") is False
        assert verify_password("secret123", "pbkdf2_sha256$1$salt$abc") is False
