"""Account DTOs for the Service Layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

PASSWORD_MIN_LENGTH = 8


class RegisterUserDTO(BaseModel):
    """Immutable DTO for user registration.

    Validates:
    - ``username`` is non-blank (surrounding whitespace stripped).
    - ``password`` has at least ``PASSWORD_MIN_LENGTH`` characters.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)

    @field_validator("username")
    @classmethod
    def username_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Username must not be empty.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_must_be_long_enough(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters."
            )
        return v
