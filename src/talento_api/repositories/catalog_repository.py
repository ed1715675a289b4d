"""Shared queries for catalog tables (departments and job titles)."""

from typing import TypeVar

from sqlalchemy import ColumnElement, func, select

from talento_api.models.orm.base import Base
from talento_api.models.orm.employee import EmployeeORM
from talento_api.repositories.base import BaseRepository

C = TypeVar("C", bound=Base)


class CatalogRepository(BaseRepository[C]):
    """Base repository for catalog entries referenced by employees."""

    def _employee_fk(self) -> ColumnElement[int]:
        """Employee column that references this catalog table."""
        raise NotImplementedError

    async def get_by_name(self, name: str) -> C | None:
        """Get an entry by name (case-insensitive).

        Args:
            name: Catalog entry name

        Returns:
            Entry or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(func.lower(self.model.name) == name.strip().lower())
        )
        return result.scalar_one_or_none()

    async def get_all_with_employee_count(self) -> list[tuple[C, int]]:
        """Get all entries with their employee count, ordered by name.

        Returns:
            List of (entry, employee_count) tuples
        """
        result = await self.session.execute(
            select(self.model, func.count(EmployeeORM.id))
            .outerjoin(EmployeeORM, self._employee_fk() == self.model.id)
            .group_by(self.model.id)
            .order_by(self.model.name)
        )
        return [(entry, count) for entry, count in result.all()]

    async def get_by_id_with_employee_count(self, id: int) -> tuple[C, int] | None:
        """Get one entry with its employee count.

        Args:
            id: Entry ID

        Returns:
            (entry, employee_count) or None if not found
        """
        result = await self.session.execute(
            select(self.model, func.count(EmployeeORM.id))
            .outerjoin(EmployeeORM, self._employee_fk() == self.model.id)
            .where(self.model.id == id)
            .group_by(self.model.id)
        )
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def has_employees(self, id: int) -> bool:
        """Check whether any employee references the entry."""
        result = await self.session.execute(
            select(select(EmployeeORM.id).where(self._employee_fk() == id).exists())
        )
        return bool(result.scalar())
