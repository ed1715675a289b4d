"""Unit of work grouping the repositories of one request."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from talento_api.repositories.admin_user_repository import AdminUserRepository
from talento_api.repositories.department_repository import DepartmentRepository
from talento_api.repositories.employee_repository import EmployeeRepository
from talento_api.repositories.job_title_repository import JobTitleRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Transactional boundary over a single AsyncSession.

    Repositories are created on first access and share the session, so
    everything staged through them is written by one ``save_changes`` call.
    An explicit transaction (``begin_transaction``) turns ``save_changes``
    into a flush only; the final commit then belongs to
    ``commit_transaction``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._employees: EmployeeRepository | None = None
        self._departments: DepartmentRepository | None = None
        self._job_titles: JobTitleRepository | None = None
        self._admin_users: AdminUserRepository | None = None
        self._transaction: AsyncSessionTransaction | None = None

    @property
    def employees(self) -> EmployeeRepository:
        if self._employees is None:
            self._employees = EmployeeRepository(self.session)
        return self._employees

    @property
    def departments(self) -> DepartmentRepository:
        if self._departments is None:
            self._departments = DepartmentRepository(self.session)
        return self._departments

    @property
    def job_titles(self) -> JobTitleRepository:
        if self._job_titles is None:
            self._job_titles = JobTitleRepository(self.session)
        return self._job_titles

    @property
    def admin_users(self) -> AdminUserRepository:
        if self._admin_users is None:
            self._admin_users = AdminUserRepository(self.session)
        return self._admin_users

    @property
    def in_transaction(self) -> bool:
        """Whether an explicit transaction is open."""
        return self._transaction is not None

    async def save_changes(self) -> int:
        """Write all pending changes.

        Commits immediately unless an explicit transaction is open. Integrity
        errors propagate to the caller unchanged and the session is rolled
        back when the commit belongs to this call.

        Returns:
            Number of new, modified and deleted objects written
        """
        pending = len(self.session.new) + len(self.session.dirty) + len(self.session.deleted)
        if self.in_transaction:
            await self.session.flush()
            return pending
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return pending

    async def begin_transaction(self) -> None:
        """Open an explicit transaction for a multi-step operation."""
        if self.in_transaction:
            raise RuntimeError("A transaction is already in progress")
        if self.session.in_transaction():
            # Reuse the implicit transaction autobegun by earlier reads
            self._transaction = self.session.get_transaction()
        else:
            self._transaction = await self.session.begin()
        logger.debug("Unit of work transaction started")

    async def commit_transaction(self) -> None:
        """Commit the explicit transaction."""
        if not self.in_transaction:
            raise RuntimeError("No transaction in progress")
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        finally:
            self._transaction = None

    async def rollback_transaction(self) -> None:
        """Discard everything written since ``begin_transaction``."""
        if not self.in_transaction:
            return
        try:
            await self.session.rollback()
        finally:
            self._transaction = None
