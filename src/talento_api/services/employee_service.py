"""Employee service: CRUD with uniqueness rules and dashboard aggregates."""

import logging
from collections import Counter

from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.exceptions import (
    DepartmentNotFoundError,
    DuplicateDocumentError,
    DuplicateEmailError,
    EmployeeNotFoundError,
    JobTitleNotFoundError,
)
from talento_api.models.domain.employee import EmployeeStatus
from talento_api.models.dto.dashboard import DashboardStats, GroupCount
from talento_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeProfileResponse,
    EmployeeResponse,
    EmployeeUpdate,
    EmployeeWrite,
)
from talento_api.models.orm.employee import EmployeeORM
from talento_api.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def build_employee_response(employee: EmployeeORM) -> EmployeeResponse:
    """Build an EmployeeResponse from an ORM object with relations loaded."""
    status = employee.status_enum
    level = employee.education_enum
    return EmployeeResponse(
        id=employee.id,
        document=employee.document,
        first_names=employee.first_names,
        last_names=employee.last_names,
        full_name=employee.full_name,
        birth_date=employee.birth_date,
        age=employee.age,
        address=employee.address,
        phone=employee.phone,
        email=employee.email,
        salary=employee.salary,
        hire_date=employee.hire_date,
        years_of_service=employee.years_of_service,
        status=status,
        status_label=status.label,
        education_level=level,
        education_level_label=level.label,
        professional_profile=employee.professional_profile,
        department_id=employee.department_id,
        department_name=employee.department.name if employee.department else None,
        job_title_id=employee.job_title_id,
        job_title_name=employee.job_title.name if employee.job_title else None,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def build_profile_response(employee: EmployeeORM) -> EmployeeProfileResponse:
    """Build the public API profile, with status and education as labels."""
    return EmployeeProfileResponse(
        id=employee.id,
        document=employee.document,
        first_names=employee.first_names,
        last_names=employee.last_names,
        full_name=employee.full_name,
        birth_date=employee.birth_date,
        age=employee.age,
        address=employee.address,
        phone=employee.phone,
        email=employee.email,
        salary=employee.salary,
        hire_date=employee.hire_date,
        years_of_service=employee.years_of_service,
        status=employee.status_enum.label,
        education_level=employee.education_enum.label,
        professional_profile=employee.professional_profile,
        department=employee.department.name if employee.department else None,
        job_title=employee.job_title.name if employee.job_title else None,
    )


class EmployeeService:
    """Service for employee records."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.uow = UnitOfWork(session)

    async def list_employees(self) -> list[EmployeeResponse]:
        """Get all employees ordered by last names then first names."""
        employees = await self.uow.employees.get_all_with_details()
        return [build_employee_response(e) for e in employees]

    async def get_employee(self, employee_id: int) -> EmployeeResponse:
        """Get an employee by ID.

        Raises:
            EmployeeNotFoundError: If no employee has the ID
        """
        employee = await self.uow.employees.get_with_details(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return build_employee_response(employee)

    async def get_employee_orm(self, employee_id: int) -> EmployeeORM:
        """Get an employee ORM object with relations loaded.

        Raises:
            EmployeeNotFoundError: If no employee has the ID
        """
        employee = await self.uow.employees.get_with_details(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def get_profile(self, employee_id: int) -> EmployeeProfileResponse:
        """Get the self-service profile of an employee.

        Raises:
            EmployeeNotFoundError: If no employee has the ID
        """
        return build_profile_response(await self.get_employee_orm(employee_id))

    async def get_by_document(self, document: str) -> EmployeeResponse | None:
        """Get an employee by document number, or None."""
        employee = await self.uow.employees.get_by_document(document)
        return build_employee_response(employee) if employee else None

    async def get_by_email(self, email: str) -> EmployeeResponse | None:
        """Get an employee by email (case-insensitive), or None."""
        employee = await self.uow.employees.get_by_email(email)
        return build_employee_response(employee) if employee else None

    async def exists_by_document(self, document: str, exclude_id: int | None = None) -> bool:
        """Check whether a document number is used by an employee other than exclude_id."""
        return await self.uow.employees.document_taken(document, exclude_id)

    async def exists_by_email(self, email: str, exclude_id: int | None = None) -> bool:
        """Check whether an email is used by an employee other than exclude_id."""
        return await self.uow.employees.email_taken(email, exclude_id)

    async def _validate(self, data: EmployeeWrite, exclude_id: int | None = None) -> None:
        """Run catalog and uniqueness checks before any write.

        Raises:
            DepartmentNotFoundError: If the department does not exist
            JobTitleNotFoundError: If the job title does not exist
            DuplicateDocumentError: If another employee has the document
            DuplicateEmailError: If another employee has the email
        """
        if await self.uow.departments.get_by_id(data.department_id) is None:
            raise DepartmentNotFoundError(data.department_id)
        if await self.uow.job_titles.get_by_id(data.job_title_id) is None:
            raise JobTitleNotFoundError(data.job_title_id)
        if await self.exists_by_document(data.document, exclude_id):
            raise DuplicateDocumentError(data.document)
        if await self.exists_by_email(data.email, exclude_id):
            raise DuplicateEmailError(data.email)

    async def create_employee(self, data: EmployeeCreate) -> EmployeeResponse:
        """Create an employee.

        Args:
            data: Full employee record

        Returns:
            Created EmployeeResponse

        Raises:
            DuplicateDocumentError: If the document number is taken
            DuplicateEmailError: If the email is taken
            DepartmentNotFoundError: If the department does not exist
            JobTitleNotFoundError: If the job title does not exist
        """
        await self._validate(data)

        employee = await self.uow.employees.create(**data.model_dump())
        await self.uow.save_changes()

        logger.info(f"Employee created: id={employee.id}")
        return await self.get_employee(employee.id)

    async def update_employee(self, employee_id: int, data: EmployeeUpdate) -> EmployeeResponse:
        """Replace every field of an employee record.

        Args:
            employee_id: Employee to update
            data: Full replacement record

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            DuplicateDocumentError: If another employee has the document
            DuplicateEmailError: If another employee has the email
        """
        employee = await self.uow.employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        await self._validate(data, exclude_id=employee_id)

        await self.uow.employees.update(employee, **data.model_dump())
        await self.uow.save_changes()
        # Relations may point at a different department or job title now
        await self.session.refresh(employee, attribute_names=["department", "job_title"])

        logger.info(f"Employee updated: id={employee_id}")
        return build_employee_response(employee)

    async def delete_employee(self, employee_id: int) -> None:
        """Delete an employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.uow.employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        await self.uow.employees.delete(employee)
        await self.uow.save_changes()
        logger.info(f"Employee deleted: id={employee_id}")

    async def count_by_status(self, status: EmployeeStatus) -> int:
        """Count employees in a status."""
        return await self.uow.employees.count_by_status(status)

    async def count_total(self) -> int:
        """Count all employees."""
        return await self.uow.employees.count()

    async def get_dashboard_stats(self) -> DashboardStats:
        """Compute dashboard totals from a single load of every employee.

        Status counts are derived from the same list as the total, so
        active + inactive + on_vacation always equals total_employees.
        """
        employees = await self.uow.employees.get_all_with_details()

        by_status = Counter(e.status_enum for e in employees)
        by_department = Counter(
            e.department.name if e.department else "Sin departamento" for e in employees
        )
        by_job_title = Counter(
            e.job_title.name if e.job_title else "Sin cargo" for e in employees
        )

        return DashboardStats(
            total_employees=len(employees),
            active_employees=by_status[EmployeeStatus.ACTIVE],
            inactive_employees=by_status[EmployeeStatus.INACTIVE],
            on_vacation_employees=by_status[EmployeeStatus.ON_VACATION],
            by_department=_sorted_groups(by_department),
            by_job_title=_sorted_groups(by_job_title),
        )


def _sorted_groups(counter: Counter) -> list[GroupCount]:
    # Count descending, then name for a stable order
    return [
        GroupCount(name=name, count=count)
        for name, count in sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    ]
