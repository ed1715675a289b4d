"""Repositories package."""

from talento_api.repositories.admin_user_repository import AdminUserRepository
from talento_api.repositories.base import BaseRepository
from talento_api.repositories.department_repository import DepartmentRepository
from talento_api.repositories.employee_repository import EmployeeRepository
from talento_api.repositories.job_title_repository import JobTitleRepository
from talento_api.repositories.unit_of_work import UnitOfWork

__all__ = [
    "BaseRepository",
    "AdminUserRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "JobTitleRepository",
    "UnitOfWork",
]
