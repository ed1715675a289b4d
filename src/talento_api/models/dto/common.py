"""Uniform API response envelope."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every /api payload."""

    success: bool
    message: str | None = None
    data: T | None = None
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def ok(cls, data: Any = None, message: str = "Operación exitosa") -> "ApiResponse":
        """Successful response carrying a payload."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: list[str] | None = None) -> "ApiResponse":
        """Failed response with a message and optional error list."""
        return cls(success=False, message=message, data=None, errors=errors or [])
