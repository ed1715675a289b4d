"""Employee import from Excel workbooks."""

import logging
from io import BytesIO
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.config import Settings, get_settings
from talento_api.exceptions import InvalidImportFileError
from talento_api.models.dto.employee import EmployeeWrite
from talento_api.models.dto.imports import ImportResult
from talento_api.models.orm.department import DepartmentORM
from talento_api.models.orm.job_title import JobTitleORM
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.utils.file_parser import (
    cell_text,
    normalize_label,
    parse_date,
    parse_decimal,
    parse_education_level,
    parse_status,
)
from talento_api.utils.secure_logging import log_error
from talento_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)

# Fixed column order of the import template (first sheet, header on row 1)
COLUMNS = (
    "document",
    "first_names",
    "last_names",
    "birth_date",
    "address",
    "phone",
    "email",
    "job_title",
    "salary",
    "hire_date",
    "status",
    "education_level",
    "professional_profile",
    "department",
)

FIELD_LABELS = {
    "document": "Documento",
    "first_names": "Nombres",
    "last_names": "Apellidos",
    "birth_date": "Fecha de nacimiento",
    "address": "Dirección",
    "phone": "Teléfono",
    "email": "Email",
    "salary": "Salario",
    "hire_date": "Fecha de ingreso",
    "professional_profile": "Perfil profesional",
}


class RowError(Exception):
    """A spreadsheet row that cannot be imported."""


class ExcelImportService:
    """Bulk insert-or-update of employees from an .xlsx upload.

    Rows are matched on document number: an existing employee is updated in
    place, anything else is inserted. A bad row is reported and skipped; the
    remaining rows are written in one transaction.
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        """Initialize service with database session."""
        self.session = session
        self.uow = UnitOfWork(session)
        self.settings = settings or get_settings()

    async def import_employees(
        self,
        content: bytes,
        admin_email: str | None = None,
        ip_address: str | None = None,
    ) -> ImportResult:
        """Import employees from the first sheet of a workbook.

        Args:
            content: Raw .xlsx file content
            admin_email: Administrator running the import, for the security log
            ip_address: Client IP for the security log

        Returns:
            ImportResult with counts and per-row messages. The first message
            is always the summary line.

        Raises:
            InvalidImportFileError: If the file is empty, too large or not a workbook
        """
        if not content:
            raise InvalidImportFileError("Seleccione un archivo Excel válido.")
        max_bytes = self.settings.import_max_file_size_mb * 1024 * 1024
        if len(content) > max_bytes:
            raise InvalidImportFileError(
                f"El archivo supera el tamaño máximo de {self.settings.import_max_file_size_mb} MB."
            )

        try:
            workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
            log_error(logger, "Unreadable import workbook", e)
            raise InvalidImportFileError("El archivo no es un libro de Excel válido (.xlsx).") from e

        result = ImportResult()
        try:
            departments = {
                normalize_label(d.name): d for d in await self.uow.departments.get_all()
            }
            job_titles = {normalize_label(j.name): j for j in await self.uow.job_titles.get_all()}

            await self.uow.begin_transaction()
            try:
                sheet = workbook.worksheets[0]
                rows = sheet.iter_rows(min_row=2, max_col=len(COLUMNS), values_only=True)
                for row_number, row in enumerate(rows, start=2):
                    cells = dict(zip(COLUMNS, tuple(row) + (None,) * (len(COLUMNS) - len(row))))
                    document = cell_text(cells["document"])
                    if not document:
                        continue
                    result.total_rows += 1
                    try:
                        parsed = self._parse_row(cells, departments, job_titles)
                        inserted = await self._write_row(parsed)
                    except RowError as e:
                        result.errors += 1
                        result.messages.append(f"Fila {row_number}: {e} (documento {document})")
                        continue
                    except SQLAlchemyError:
                        raise
                    except Exception as e:
                        log_error(logger, f"Unexpected error importing row {row_number}", e)
                        result.errors += 1
                        result.messages.append(
                            f"Fila {row_number}: Error inesperado al procesar la fila (documento {document})"
                        )
                        continue
                    if inserted:
                        result.inserted += 1
                    else:
                        result.updated += 1

                await self.uow.commit_transaction()
                result.committed = True
            except SQLAlchemyError as e:
                await self.uow.rollback_transaction()
                log_error(logger, "Employee import rolled back", e)
                result.inserted = 0
                result.updated = 0
                result.messages.append(
                    "Error al guardar los datos. No se guardó ningún registro de este archivo."
                )
        finally:
            workbook.close()

        result.messages.insert(
            0,
            f"Importación completada: {result.inserted} insertados, "
            f"{result.updated} actualizados, {result.errors} errores",
        )

        log_security_event(
            SecurityEventType.BULK_IMPORT,
            user_email=admin_email,
            ip_address=ip_address,
            details={
                "total_rows": result.total_rows,
                "inserted": result.inserted,
                "updated": result.updated,
                "errors": result.errors,
                "committed": result.committed,
            },
            success=result.committed,
        )
        logger.info(
            f"Employee import: rows={result.total_rows} inserted={result.inserted} "
            f"updated={result.updated} errors={result.errors}"
        )
        return result

    def _parse_row(
        self,
        cells: dict[str, Any],
        departments: dict[str, DepartmentORM],
        job_titles: dict[str, JobTitleORM],
    ) -> EmployeeWrite:
        """Turn raw cells into a validated employee record.

        Raises:
            RowError: With a user-facing reason
        """
        birth_date = parse_date(cells["birth_date"])
        if birth_date is None:
            raise RowError("Fecha de nacimiento inválida")
        hire_date = parse_date(cells["hire_date"])
        if hire_date is None:
            raise RowError("Fecha de ingreso inválida")

        department_name = cell_text(cells["department"])
        department = departments.get(normalize_label(department_name))
        if department is None:
            raise RowError(f"Departamento '{department_name}' no encontrado")

        job_title_name = cell_text(cells["job_title"])
        job_title = job_titles.get(normalize_label(job_title_name))
        if job_title is None:
            raise RowError(f"Cargo '{job_title_name}' no encontrado")

        salary = parse_decimal(cells["salary"])
        if salary is None or salary < 0:
            salary = 0

        try:
            return EmployeeWrite(
                document=cell_text(cells["document"]),
                first_names=cell_text(cells["first_names"]),
                last_names=cell_text(cells["last_names"]),
                birth_date=birth_date,
                address=cell_text(cells["address"]),
                phone=cell_text(cells["phone"]),
                email=cell_text(cells["email"]),
                salary=round(salary, 2),
                hire_date=hire_date,
                status=parse_status(cells["status"]),
                education_level=parse_education_level(cells["education_level"]),
                professional_profile=cell_text(cells["professional_profile"]) or None,
                department_id=department.id,
                job_title_id=job_title.id,
            )
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else ""
            label = FIELD_LABELS.get(field, field)
            raise RowError(f"{label} inválido o vacío") from e

    async def _write_row(self, parsed: EmployeeWrite) -> bool:
        """Insert or update one employee; True when a new record was inserted.

        Raises:
            RowError: If the email belongs to another employee
        """
        values = parsed.model_dump()
        existing = await self.uow.employees.get_by_document(values["document"])
        exclude_id = existing.id if existing is not None else None
        if await self.uow.employees.email_taken(values["email"], exclude_id=exclude_id):
            raise RowError(f"El email {values['email']} ya está registrado para otro empleado")

        if existing is not None:
            await self.uow.employees.update(existing, **values)
            await self.uow.save_changes()
            return False

        await self.uow.employees.create(**values)
        await self.uow.save_changes()
        return True
