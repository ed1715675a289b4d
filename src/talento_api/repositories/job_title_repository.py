"""Job title repository."""

from sqlalchemy import ColumnElement

from talento_api.models.orm.employee import EmployeeORM
from talento_api.models.orm.job_title import JobTitleORM
from talento_api.repositories.catalog_repository import CatalogRepository


class JobTitleRepository(CatalogRepository[JobTitleORM]):
    """Repository for job title operations."""

    model = JobTitleORM

    def _employee_fk(self) -> ColumnElement[int]:
        return EmployeeORM.job_title_id
