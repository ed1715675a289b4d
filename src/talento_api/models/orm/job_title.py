"""Job title ORM model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from talento_api.models.orm.base import Base, IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from talento_api.models.orm.employee import EmployeeORM


class JobTitleORM(Base, IntIdMixin, TimestampMixin):
    """Job title catalog entry."""

    __tablename__ = "job_titles"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(250), nullable=True)

    employees: Mapped[list["EmployeeORM"]] = relationship(
        "EmployeeORM", back_populates="job_title", passive_deletes="all"
    )
