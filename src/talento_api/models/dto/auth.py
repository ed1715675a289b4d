"""Authentication DTOs."""

import re
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


class EmployeeLoginRequest(BaseModel):
    """Employee login request (document number plus email)."""

    document: str = Field(min_length=1, max_length=20)
    email: EmailStr


class EmployeeRegisterRequest(BaseModel):
    """Public self-registration request."""

    document: str = Field(min_length=1, max_length=20)
    first_names: str = Field(min_length=1, max_length=100)
    last_names: str = Field(min_length=1, max_length=100)
    birth_date: date
    address: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=20)
    email: EmailStr = Field(max_length=150)
    department_id: int = Field(gt=0)
    professional_profile: str | None = Field(default=None, max_length=500)

    @field_validator("document", "first_names", "last_names", "address", "phone")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("El campo es requerido")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class TokenResponse(BaseModel):
    """Bearer token issued to an employee."""

    token: str
    token_type: str = "bearer"
    expiration: datetime
    document: str
    full_name: str
    email: str


# Admin console password rule: 6+ chars with a digit, a lowercase and an uppercase letter
ADMIN_PASSWORD_MIN_LENGTH = 6
# bcrypt only accepts the first 72 bytes of a password
ADMIN_PASSWORD_MAX_BYTES = 72


def validate_admin_password(password: str) -> list[str]:
    """Check an admin password against the console policy.

    Args:
        password: Candidate password

    Returns:
        List of error messages, empty when the password is acceptable
    """
    errors = []
    if len(password) < ADMIN_PASSWORD_MIN_LENGTH:
        errors.append(
            f"La contraseña debe tener al menos {ADMIN_PASSWORD_MIN_LENGTH} caracteres"
        )
    if len(password.encode("utf-8")) > ADMIN_PASSWORD_MAX_BYTES:
        errors.append(
            f"La contraseña no puede superar los {ADMIN_PASSWORD_MAX_BYTES} bytes "
            "(use menos caracteres o evite acentos y símbolos especiales)"
        )
    if not re.search(r"\d", password):
        errors.append("La contraseña debe contener al menos un dígito")
    if not re.search(r"[a-z]", password):
        errors.append("La contraseña debe contener al menos una letra minúscula")
    if not re.search(r"[A-Z]", password):
        errors.append("La contraseña debe contener al menos una letra mayúscula")
    return errors


class AdminLoginRequest(BaseModel):
    """Admin console login form."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class AdminRegisterRequest(BaseModel):
    """First-administrator registration form."""

    first_names: str = Field(min_length=1, max_length=100)
    last_names: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(max_length=100)
    confirm_password: str = Field(max_length=100)

    @field_validator("password")
    @classmethod
    def password_policy(cls, value: str) -> str:
        errors = validate_admin_password(value)
        if errors:
            raise ValueError("; ".join(errors))
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "AdminRegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Las contraseñas no coinciden")
        return self
