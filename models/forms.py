"""Form input models.

Every create/edit operation validates its raw input through one of these
pydantic models before anything is written to the database.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Literal, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from tools.periods import MAX_YEAR, MIN_YEAR

MIN_PASSWORD_LENGTH = 6
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

FormT = TypeVar("FormT", bound=BaseModel)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RegistrationForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr = Field(max_length=180)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    confirm_password: str = ""

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes."
            )
        return value

    @model_validator(mode="after")
    def check_passwords_match(self) -> "RegistrationForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class CategoryForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    type: Literal["income", "expense"]
    description: Optional[str] = Field(default=None, max_length=255)
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    icon: Optional[str] = Field(default=None, max_length=50)

    @field_validator("description", "color", "icon", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class TransactionForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    type: Literal["income", "expense"]
    transaction_date: date
    category_id: int
    description: Optional[str] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    @field_validator("description", "payment_method", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


class BudgetForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    category_name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None

    @field_validator("category_name", "description", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _blank_to_none(value)


def parse_form(form_cls: Type[FormT], data: dict) -> FormT:
    """Validate raw form data.

    Args:
        form_cls: One of the form models above.
        data: Field values, typically strings from the command line.

    Returns:
        The validated form.

    Raises:
        ValidationError: With one message per offending field.
    """
    try:
        return form_cls.model_validate(data)
    except PydanticValidationError as e:
        field_errors: Dict[str, str] = {}
        form_message = None
        for error in e.errors():
            message = error["msg"].removeprefix("Value error, ")
            if error["loc"]:
                field_errors.setdefault(str(error["loc"][0]), message)
            else:
                form_message = message
        raise ValidationError(
            form_message or "Invalid form data.", field_errors
        ) from e
