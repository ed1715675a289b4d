"""Domain-specific exceptions for the TalentoPlus API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from typing import Any


class TalentoAPIError(Exception):
    """Base exception for all TalentoPlus errors."""

    def __init__(self, message: str = "Ocurrió un error", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(TalentoAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: int | None = None) -> None:
        details = {"employee_id": employee_id} if employee_id is not None else {}
        super().__init__("Empleado no encontrado", details)


class DepartmentNotFoundError(NotFoundError):
    """Raised when a department cannot be found."""

    def __init__(self, department_id: int | None = None, name: str | None = None) -> None:
        details: dict[str, Any] = {}
        if department_id is not None:
            details["department_id"] = department_id
        if name:
            details["name"] = name
        super().__init__("Departamento no encontrado", details)


class JobTitleNotFoundError(NotFoundError):
    """Raised when a job title cannot be found."""

    def __init__(self, job_title_id: int | None = None, name: str | None = None) -> None:
        details: dict[str, Any] = {}
        if job_title_id is not None:
            details["job_title_id"] = job_title_id
        if name:
            details["name"] = name
        super().__init__("Cargo no encontrado", details)


# =============================================================================
# Conflict Errors
# =============================================================================


class ConflictError(TalentoAPIError):
    """Base class for resource conflict errors."""

    pass


class DuplicateDocumentError(ConflictError):
    """Raised when a document number is already owned by another employee."""

    def __init__(self, document: str | None = None) -> None:
        details = {"document": document} if document else {}
        super().__init__("Ya existe un empleado con este documento", details)


class DuplicateEmailError(ConflictError):
    """Raised when an email is already owned by another employee."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Ya existe un empleado con este email", details)


class DuplicateCatalogNameError(ConflictError):
    """Raised when a department or job title name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__("Ya existe un registro con este nombre", {"name": name})


class CatalogEntryInUseError(ConflictError):
    """Raised when deleting a department or job title that employees reference."""

    def __init__(self, entity: str, entry_id: int) -> None:
        super().__init__(
            f"No se puede eliminar: hay empleados asociados a este {entity}",
            {"entity": entity, "id": entry_id},
        )


class AdministratorAlreadyExistsError(ConflictError):
    """Raised when registering a second administrator."""

    def __init__(self) -> None:
        super().__init__("Ya existe un administrador registrado.")


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(TalentoAPIError):
    """Base class for validation errors."""

    pass


class InvalidImportFileError(ValidationError):
    """Raised when an uploaded spreadsheet cannot be read."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)


# =============================================================================
# Authentication Errors (401)
# =============================================================================


class AuthenticationError(TalentoAPIError):
    """Raised when credentials are rejected."""

    def __init__(self, message: str = "Credenciales inválidas") -> None:
        super().__init__(message)


class AccountLockedError(AuthenticationError):
    """Raised when an admin account is temporarily locked."""

    def __init__(self) -> None:
        super().__init__(
            "Cuenta bloqueada temporalmente por múltiples intentos fallidos. "
            "Intente nuevamente en unos minutos."
        )


class AdminSessionRequiredError(TalentoAPIError):
    """Raised when a console page is requested without an administrator session."""

    def __init__(self, return_url: str | None = None) -> None:
        self.return_url = return_url
        super().__init__("Debe iniciar sesión como administrador")


# =============================================================================
# Integration Errors (500)
# =============================================================================


class PdfGenerationError(TalentoAPIError):
    """Raised when the resume PDF cannot be rendered."""

    def __init__(self) -> None:
        super().__init__("Error al generar la hoja de vida")
