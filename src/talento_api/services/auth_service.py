"""Employee self-registration and bearer-token login."""

import asyncio
import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.exceptions import (
    AuthenticationError,
    DepartmentNotFoundError,
    DuplicateDocumentError,
    DuplicateEmailError,
    JobTitleNotFoundError,
)
from talento_api.models.domain.catalog import DEFAULT_JOB_TITLE_NAME
from talento_api.models.domain.employee import EducationLevel, EmployeeStatus
from talento_api.models.dto.auth import EmployeeRegisterRequest, TokenResponse
from talento_api.models.dto.employee import EmployeeResponse
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.security.auth import create_employee_token
from talento_api.services.email_service import EmailService
from talento_api.services.employee_service import build_employee_response
from talento_api.utils.secure_logging import log_warning
from talento_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)

# Keeps fire-and-forget email tasks referenced until they finish
_background_tasks: set[asyncio.Task] = set()


class AuthService:
    """Authentication for employees using the public API."""

    def __init__(self, session: AsyncSession, email_service: EmailService | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.uow = UnitOfWork(session)
        self.email_service = email_service or EmailService()

    async def register(
        self,
        data: EmployeeRegisterRequest,
        ip_address: str | None = None,
    ) -> EmployeeResponse:
        """Register a new employee.

        The new record is always inactive, at the lowest education level,
        with salary 0, hired today and holding the default job title. A
        welcome email is sent in the background.

        Args:
            data: Registration data
            ip_address: Client IP for the security log

        Returns:
            Created EmployeeResponse

        Raises:
            DuplicateDocumentError: If the document number is taken
            DuplicateEmailError: If the email is taken
            DepartmentNotFoundError: If the department does not exist
            JobTitleNotFoundError: If the default job title is missing from the catalog
        """
        if await self.uow.employees.document_taken(data.document):
            raise DuplicateDocumentError(data.document)
        if await self.uow.employees.email_taken(data.email):
            raise DuplicateEmailError(data.email)
        if await self.uow.departments.get_by_id(data.department_id) is None:
            raise DepartmentNotFoundError(data.department_id)

        job_title = await self.uow.job_titles.get_by_name(DEFAULT_JOB_TITLE_NAME)
        if job_title is None:
            raise JobTitleNotFoundError(name=DEFAULT_JOB_TITLE_NAME)

        employee = await self.uow.employees.create(
            document=data.document,
            first_names=data.first_names,
            last_names=data.last_names,
            birth_date=data.birth_date,
            address=data.address,
            phone=data.phone,
            email=data.email,
            professional_profile=data.professional_profile,
            department_id=data.department_id,
            job_title_id=job_title.id,
            salary=Decimal("0"),
            hire_date=date.today(),
            status=EmployeeStatus.INACTIVE.value,
            education_level=EducationLevel.TECHNICIAN.value,
        )
        await self.uow.save_changes()

        log_security_event(
            SecurityEventType.EMPLOYEE_REGISTERED,
            user_id=employee.id,
            user_email=employee.email,
            ip_address=ip_address,
        )

        self._send_welcome_email_later(employee.email, employee.full_name)

        created = await self.uow.employees.get_with_details(employee.id)
        return build_employee_response(created)

    def _send_welcome_email_later(self, email: str, full_name: str) -> None:
        """Schedule the welcome email without waiting for SMTP."""
        task = asyncio.create_task(self.email_service.send_welcome_email(email, full_name))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    async def login(
        self,
        document: str,
        email: str,
        ip_address: str | None = None,
    ) -> TokenResponse:
        """Issue a bearer token for an employee.

        Both the document number and the email must belong to the same
        employee, and that employee must be active or on vacation.

        Raises:
            AuthenticationError: For any other combination
        """
        employee = await self.uow.employees.get_by_document_and_email(document, email)

        if employee is None or not employee.status_enum.can_login:
            log_security_event(
                SecurityEventType.EMPLOYEE_LOGIN_FAILED,
                user_email=email,
                ip_address=ip_address,
                details={"reason": "not_found" if employee is None else "status"},
                success=False,
            )
            if employee is not None:
                log_warning(logger, "Login refused for employee without active status")
            raise AuthenticationError("Credenciales inválidas o usuario inactivo")

        token, expiration = create_employee_token(
            employee_id=employee.id,
            document=employee.document,
            email=employee.email,
            first_names=employee.first_names,
            last_names=employee.last_names,
        )

        log_security_event(
            SecurityEventType.EMPLOYEE_LOGIN_SUCCESS,
            user_id=employee.id,
            user_email=employee.email,
            ip_address=ip_address,
        )

        return TokenResponse(
            token=token,
            expiration=expiration,
            document=employee.document,
            full_name=employee.full_name,
            email=employee.email,
        )
