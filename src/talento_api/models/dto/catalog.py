"""Department and job title DTOs."""

from pydantic import BaseModel, Field


class CatalogEntryResponse(BaseModel):
    """Catalog entry with its employee count."""

    id: int
    name: str
    description: str | None = None
    employee_count: int = 0


class DepartmentResponse(CatalogEntryResponse):
    """Department response DTO."""

    pass


class JobTitleResponse(CatalogEntryResponse):
    """Job title response DTO."""

    pass


class CatalogEntryCreate(BaseModel):
    """DTO for creating a department or job title."""

    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=250)
