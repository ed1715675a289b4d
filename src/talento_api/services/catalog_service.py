"""Catalog service for departments and job titles."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.exceptions import (
    CatalogEntryInUseError,
    DepartmentNotFoundError,
    DuplicateCatalogNameError,
    JobTitleNotFoundError,
)
from talento_api.models.dto.catalog import (
    CatalogEntryCreate,
    DepartmentResponse,
    JobTitleResponse,
)
from talento_api.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-mostly access to departments and job titles."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.uow = UnitOfWork(session)

    async def list_departments(self) -> list[DepartmentResponse]:
        """Get all departments with employee counts, ordered by name."""
        rows = await self.uow.departments.get_all_with_employee_count()
        return [
            DepartmentResponse(
                id=department.id,
                name=department.name,
                description=department.description,
                employee_count=count,
            )
            for department, count in rows
        ]

    async def get_department(self, department_id: int) -> DepartmentResponse:
        """Get a department with its employee count.

        Raises:
            DepartmentNotFoundError: If the department does not exist
        """
        row = await self.uow.departments.get_by_id_with_employee_count(department_id)
        if row is None:
            raise DepartmentNotFoundError(department_id)
        department, count = row
        return DepartmentResponse(
            id=department.id,
            name=department.name,
            description=department.description,
            employee_count=count,
        )

    async def list_job_titles(self) -> list[JobTitleResponse]:
        """Get all job titles with employee counts, ordered by name."""
        rows = await self.uow.job_titles.get_all_with_employee_count()
        return [
            JobTitleResponse(
                id=job_title.id,
                name=job_title.name,
                description=job_title.description,
                employee_count=count,
            )
            for job_title, count in rows
        ]

    async def get_job_title(self, job_title_id: int) -> JobTitleResponse:
        """Get a job title with its employee count.

        Raises:
            JobTitleNotFoundError: If the job title does not exist
        """
        row = await self.uow.job_titles.get_by_id_with_employee_count(job_title_id)
        if row is None:
            raise JobTitleNotFoundError(job_title_id)
        job_title, count = row
        return JobTitleResponse(
            id=job_title.id,
            name=job_title.name,
            description=job_title.description,
            employee_count=count,
        )

    async def create_department(self, data: CatalogEntryCreate) -> DepartmentResponse:
        """Create a department with a unique name.

        Raises:
            DuplicateCatalogNameError: If the name is taken
        """
        name = data.name.strip()
        if await self.uow.departments.get_by_name(name) is not None:
            raise DuplicateCatalogNameError(name)
        department = await self.uow.departments.create(name=name, description=data.description)
        await self.uow.save_changes()
        logger.info(f"Department created: id={department.id}")
        return DepartmentResponse(
            id=department.id, name=department.name, description=department.description
        )

    async def create_job_title(self, data: CatalogEntryCreate) -> JobTitleResponse:
        """Create a job title with a unique name.

        Raises:
            DuplicateCatalogNameError: If the name is taken
        """
        name = data.name.strip()
        if await self.uow.job_titles.get_by_name(name) is not None:
            raise DuplicateCatalogNameError(name)
        job_title = await self.uow.job_titles.create(name=name, description=data.description)
        await self.uow.save_changes()
        logger.info(f"Job title created: id={job_title.id}")
        return JobTitleResponse(
            id=job_title.id, name=job_title.name, description=job_title.description
        )

    async def delete_department(self, department_id: int) -> None:
        """Delete a department no employee references.

        Raises:
            DepartmentNotFoundError: If the department does not exist
            CatalogEntryInUseError: If employees still belong to it
        """
        department = await self.uow.departments.get_by_id(department_id)
        if department is None:
            raise DepartmentNotFoundError(department_id)
        if await self.uow.departments.has_employees(department_id):
            raise CatalogEntryInUseError("departamento", department_id)
        await self.uow.departments.delete(department)
        await self.uow.save_changes()
        logger.info(f"Department deleted: id={department_id}")

    async def delete_job_title(self, job_title_id: int) -> None:
        """Delete a job title no employee holds.

        Raises:
            JobTitleNotFoundError: If the job title does not exist
            CatalogEntryInUseError: If employees still hold it
        """
        job_title = await self.uow.job_titles.get_by_id(job_title_id)
        if job_title is None:
            raise JobTitleNotFoundError(job_title_id)
        if await self.uow.job_titles.has_employees(job_title_id):
            raise CatalogEntryInUseError("cargo", job_title_id)
        await self.uow.job_titles.delete(job_title)
        await self.uow.save_changes()
        logger.info(f"Job title deleted: id={job_title_id}")
