"""Department repository."""

from sqlalchemy import ColumnElement

from talento_api.models.orm.department import DepartmentORM
from talento_api.models.orm.employee import EmployeeORM
from talento_api.repositories.catalog_repository import CatalogRepository


class DepartmentRepository(CatalogRepository[DepartmentORM]):
    """Repository for department operations."""

    model = DepartmentORM

    def _employee_fk(self) -> ColumnElement[int]:
        return EmployeeORM.department_id
