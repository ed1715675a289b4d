"""SQLAlchemy ORM models package."""

from talento_api.models.orm.base import Base
from talento_api.models.orm.admin_user import AdminUserORM
from talento_api.models.orm.department import DepartmentORM
from talento_api.models.orm.employee import EmployeeORM
from talento_api.models.orm.job_title import JobTitleORM

__all__ = [
    "Base",
    "AdminUserORM",
    "DepartmentORM",
    "EmployeeORM",
    "JobTitleORM",
]
