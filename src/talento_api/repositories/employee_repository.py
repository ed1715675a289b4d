"""Employee repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from talento_api.models.domain.employee import EmployeeStatus
from talento_api.models.orm.employee import EmployeeORM
from talento_api.models.orm.job_title import JobTitleORM
from talento_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    def _with_details(self):
        return select(EmployeeORM).options(
            selectinload(EmployeeORM.department),
            selectinload(EmployeeORM.job_title),
        )

    async def get_by_document(self, document: str) -> EmployeeORM | None:
        """Get employee by document number.

        Args:
            document: Identity document number

        Returns:
            EmployeeORM with department and job title loaded, or None
        """
        result = await self.session.execute(
            self._with_details().where(EmployeeORM.document == document.strip())
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email (case-insensitive).

        Args:
            email: Employee email

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            self._with_details().where(func.lower(EmployeeORM.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_by_document_and_email(self, document: str, email: str) -> EmployeeORM | None:
        """Get the employee matching both document number and email.

        Args:
            document: Identity document number
            email: Employee email (case-insensitive)

        Returns:
            EmployeeORM or None if no record matches both
        """
        result = await self.session.execute(
            self._with_details().where(
                EmployeeORM.document == document.strip(),
                func.lower(EmployeeORM.email) == email.strip().lower(),
            )
        )
        return result.scalar_one_or_none()

    async def get_by_department(self, department_id: int) -> list[EmployeeORM]:
        """Get employees of a department."""
        result = await self.session.execute(
            self._with_details()
            .where(EmployeeORM.department_id == department_id)
            .order_by(EmployeeORM.last_names, EmployeeORM.first_names)
        )
        return list(result.scalars().all())

    async def get_by_job_title(self, job_title_id: int) -> list[EmployeeORM]:
        """Get employees holding a job title."""
        result = await self.session.execute(
            self._with_details()
            .where(EmployeeORM.job_title_id == job_title_id)
            .order_by(EmployeeORM.last_names, EmployeeORM.first_names)
        )
        return list(result.scalars().all())

    async def get_by_status(self, status: EmployeeStatus) -> list[EmployeeORM]:
        """Get employees in a given status."""
        result = await self.session.execute(
            self._with_details()
            .where(EmployeeORM.status == status.value)
            .order_by(EmployeeORM.last_names, EmployeeORM.first_names)
        )
        return list(result.scalars().all())

    async def get_with_details(self, employee_id: int) -> EmployeeORM | None:
        """Get employee by ID with department and job title loaded.

        Args:
            employee_id: Employee ID

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            self._with_details().where(EmployeeORM.id == employee_id)
        )
        return result.scalar_one_or_none()

    async def get_all_with_details(self) -> list[EmployeeORM]:
        """Get every employee with relations, ordered by last names then first names."""
        result = await self.session.execute(
            self._with_details().order_by(EmployeeORM.last_names, EmployeeORM.first_names)
        )
        return list(result.scalars().all())

    async def count_by_status(self, status: EmployeeStatus) -> int:
        """Count employees in a given status."""
        return await self.count(EmployeeORM.status == status.value)

    async def count_by_department(self, department_id: int) -> int:
        """Count employees of a department."""
        return await self.count(EmployeeORM.department_id == department_id)

    async def count_by_job_title_name(self, job_title_name: str) -> int:
        """Count employees whose job title has the given name (case-insensitive)."""
        result = await self.session.execute(
            select(func.count(EmployeeORM.id))
            .join(JobTitleORM, EmployeeORM.job_title_id == JobTitleORM.id)
            .where(func.lower(JobTitleORM.name) == job_title_name.strip().lower())
        )
        return result.scalar_one()

    async def document_taken(self, document: str, exclude_id: int | None = None) -> bool:
        """Check whether a document number belongs to another employee.

        Args:
            document: Document number to check
            exclude_id: Employee ID to ignore (the record being updated)

        Returns:
            True if a different employee already uses the document
        """
        criteria = [EmployeeORM.document == document.strip()]
        if exclude_id is not None:
            criteria.append(EmployeeORM.id != exclude_id)
        return await self.exists(*criteria)

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        """Check whether an email (case-insensitive) belongs to another employee.

        Args:
            email: Email to check
            exclude_id: Employee ID to ignore (the record being updated)

        Returns:
            True if a different employee already uses the email
        """
        criteria = [func.lower(EmployeeORM.email) == email.strip().lower()]
        if exclude_id is not None:
            criteria.append(EmployeeORM.id != exclude_id)
        return await self.exists(*criteria)
