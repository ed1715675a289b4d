"""Employee DTOs."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator

from talento_api.models.domain.employee import EducationLevel, EmployeeStatus


class EmployeeWrite(BaseModel):
    """Full employee record as submitted for create or replace."""

    document: str = Field(min_length=1, max_length=20, description="Identity document number")
    first_names: str = Field(min_length=1, max_length=100)
    last_names: str = Field(min_length=1, max_length=100)
    birth_date: date
    address: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=20)
    email: EmailStr = Field(max_length=150)
    salary: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    education_level: EducationLevel = EducationLevel.TECHNICIAN
    professional_profile: str | None = Field(default=None, max_length=500)
    department_id: int = Field(gt=0)
    job_title_id: int = Field(gt=0)

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

    @field_validator("professional_profile")
    @classmethod
    def blank_profile_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("birth_date")
    @classmethod
    def birth_date_in_past(cls, value: date) -> date:
        if value >= date.today():
            raise ValueError("La fecha de nacimiento debe ser anterior a hoy")
        return value


class EmployeeCreate(EmployeeWrite):
    """DTO for creating an employee."""

    pass


class EmployeeUpdate(EmployeeWrite):
    """DTO for replacing an employee record (no partial updates)."""

    pass


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    id: int
    document: str
    first_names: str
    last_names: str
    full_name: str
    birth_date: date
    age: int
    address: str
    phone: str
    email: str
    salary: Decimal
    hire_date: date
    years_of_service: int
    status: EmployeeStatus
    status_label: str
    education_level: EducationLevel
    education_level_label: str
    professional_profile: str | None = None
    department_id: int
    department_name: str | None = None
    job_title_id: int
    job_title_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeProfileResponse(BaseModel):
    """Profile returned to the authenticated employee by the public API."""

    id: int
    document: str
    first_names: str
    last_names: str
    full_name: str
    birth_date: date
    age: int
    address: str
    phone: str
    email: str
    salary: Decimal
    hire_date: date
    years_of_service: int
    status: str
    education_level: str
    professional_profile: str | None = None
    department: str | None = None
    job_title: str | None = None
