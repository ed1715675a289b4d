"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations.

    Writes are staged on the shared session. Nothing is committed here;
    the unit of work decides when pending changes are saved.
    """

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_by_id(self, id: int) -> T | None:
        """Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Record or None if not found
        """
        return await self.session.get(self.model, id)

    async def get_all(
        self,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        """Get all records ordered by ID.

        Args:
            offset: Number of records to skip
            limit: Maximum number of records to return, None for all

        Returns:
            List of records
        """
        query = select(self.model).order_by(self.model.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def exists(self, *criteria: ColumnElement[bool]) -> bool:
        """Check whether any record matches all criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions on the model

        Returns:
            True if at least one record matches
        """
        result = await self.session.execute(
            select(select(self.model.id).where(*criteria).exists())
        )
        return bool(result.scalar())

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        """Count records, optionally filtered.

        Returns:
            Total count
        """
        query = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def add(self, instance: T) -> T:
        """Stage a new record for insertion."""
        self.session.add(instance)
        return instance

    async def create(self, **kwargs: Any) -> T:
        """Build and stage a new record from field values.

        Args:
            **kwargs: Field values

        Returns:
            Staged record (no ID until the next flush)
        """
        return await self.add(self.model(**kwargs))

    async def update(self, instance: T, **kwargs: Any) -> T:
        """Apply field values to a record and stage it.

        Args:
            instance: Record to update
            **kwargs: Fields to replace

        Returns:
            The same record
        """
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        self.session.add(instance)
        return instance

    async def delete(self, instance: T) -> None:
        """Stage a record for deletion."""
        await self.session.delete(instance)
