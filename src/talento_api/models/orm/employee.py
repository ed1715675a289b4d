"""Employee ORM model."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from talento_api.models.domain.employee import (
    EducationLevel,
    EmployeeStatus,
    whole_years_between,
)
from talento_api.models.orm.base import Base, IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from talento_api.models.orm.department import DepartmentORM
    from talento_api.models.orm.job_title import JobTitleORM


class EmployeeORM(Base, IntIdMixin, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    document: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    first_names: Mapped[str] = mapped_column(String(100), nullable=False)
    last_names: Mapped[str] = mapped_column(String(100), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    # Stored lower-cased; uniqueness is case-insensitive
    email: Mapped[str] = mapped_column(String(150), unique=True, nullable=False, index=True)
    salary: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmployeeStatus.ACTIVE.value, index=True
    )
    education_level: Mapped[int] = mapped_column(
        Integer, nullable=False, default=EducationLevel.TECHNICIAN.value
    )
    professional_profile: Mapped[str | None] = mapped_column(String(500), nullable=True)

    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    job_title_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("job_titles.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    department: Mapped["DepartmentORM"] = relationship(
        "DepartmentORM", back_populates="employees"
    )
    job_title: Mapped["JobTitleORM"] = relationship(
        "JobTitleORM", back_populates="employees"
    )

    @property
    def full_name(self) -> str:
        """First names followed by last names."""
        return f"{self.first_names} {self.last_names}"

    @property
    def age(self) -> int:
        """Age in completed years."""
        return whole_years_between(self.birth_date)

    @property
    def years_of_service(self) -> int:
        """Completed years since the hire date."""
        return whole_years_between(self.hire_date)

    @property
    def status_enum(self) -> EmployeeStatus:
        """Status as an enum member."""
        return EmployeeStatus(self.status)

    @property
    def education_enum(self) -> EducationLevel:
        """Education level as an enum member."""
        return EducationLevel(self.education_level)
