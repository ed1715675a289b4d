"""Employee domain enums and date arithmetic."""

from datetime import date
from enum import IntEnum, StrEnum

from pydantic import BaseModel


class EmployeeStatus(StrEnum):
    """Employee lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_VACATION = "on_vacation"

    @property
    def label(self) -> str:
        """Spanish display label."""
        return STATUS_LABELS[self]

    @property
    def can_login(self) -> bool:
        """Whether employees in this status may obtain an API token."""
        return self in (EmployeeStatus.ACTIVE, EmployeeStatus.ON_VACATION)


class EducationLevel(IntEnum):
    """Highest education level, ordered from lowest to highest."""

    TECHNICIAN = 0
    TECHNOLOGIST = 1
    PROFESSIONAL = 2
    SPECIALIZATION = 3
    MASTERS = 4

    @property
    def label(self) -> str:
        """Spanish display label."""
        return EDUCATION_LABELS[self]


STATUS_LABELS = {
    EmployeeStatus.ACTIVE: "Activo",
    EmployeeStatus.INACTIVE: "Inactivo",
    EmployeeStatus.ON_VACATION: "Vacaciones",
}

EDUCATION_LABELS = {
    EducationLevel.TECHNICIAN: "Técnico",
    EducationLevel.TECHNOLOGIST: "Tecnólogo",
    EducationLevel.PROFESSIONAL: "Profesional",
    EducationLevel.SPECIALIZATION: "Especialización",
    EducationLevel.MASTERS: "Maestría",
}


def whole_years_between(start: date, today: date | None = None) -> int:
    """Count completed years since a date.

    One year is subtracted when this year's anniversary has not happened yet.
    """
    today = today or date.today()
    years = today.year - start.year
    if (today.month, today.day) < (start.month, start.day):
        years -= 1
    return years


class EmployeePrincipal(BaseModel):
    """Employee identity carried by a validated bearer token."""

    employee_id: int
    document: str
    email: str
    first_names: str = ""
    last_names: str = ""
    role: str
