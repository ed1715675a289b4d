"""Dashboard DTOs."""

from pydantic import BaseModel, Field


class GroupCount(BaseModel):
    """Employee count for one department or job title."""

    name: str
    count: int


class DashboardStats(BaseModel):
    """Workforce totals shown on the dashboard."""

    total_employees: int
    active_employees: int
    inactive_employees: int
    on_vacation_employees: int
    by_department: list[GroupCount] = Field(default_factory=list)
    by_job_title: list[GroupCount] = Field(default_factory=list)
