"""Spreadsheet import DTOs."""

from pydantic import BaseModel, Field


class ImportResult(BaseModel):
    """Outcome of an employee spreadsheet import."""

    total_rows: int = 0
    inserted: int = 0
    updated: int = 0
    errors: int = 0
    committed: bool = False
    messages: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when the batch was saved and no row failed."""
        return self.committed and self.errors == 0
