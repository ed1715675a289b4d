"""Admin user domain model."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class UserRole(StrEnum):
    """Roles known to the system."""

    ADMINISTRATOR = "Administrator"
    EMPLOYEE = "Employee"


class AdminUser(BaseModel):
    """Administrator signed in to the console."""

    id: int
    email: str
    name: str | None = None
    role: UserRole
    last_login_at: datetime | None = None

    class Config:
        """Pydantic config."""

        from_attributes = True
