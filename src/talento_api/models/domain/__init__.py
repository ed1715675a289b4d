"""Domain models package."""

from talento_api.models.domain.admin_user import AdminUser, UserRole
from talento_api.models.domain.employee import EducationLevel, EmployeePrincipal, EmployeeStatus

__all__ = [
    "AdminUser",
    "UserRole",
    "EducationLevel",
    "EmployeePrincipal",
    "EmployeeStatus",
]
