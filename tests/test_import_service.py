"""Excel employee import tests."""

from datetime import date
from decimal import Decimal

import pytest

from talento_api.exceptions import InvalidImportFileError
from talento_api.models.domain.employee import EducationLevel, EmployeeStatus
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.services import import_service
from talento_api.services.import_service import ExcelImportService
from tests.factories import add_employee, sheet_row, workbook_bytes


class TestExcelImport:
    """Insert-or-update by document number."""

    async def test_inserts_new_employees(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com"),
            sheet_row("1002", "jorge@example.com", first_names="Jorge", status="Vacaciones"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.committed
        assert result.success
        assert (result.total_rows, result.inserted, result.updated, result.errors) == (2, 2, 0, 0)
        assert result.messages[0] == "Importación completada: 2 insertados, 0 actualizados, 0 errores"

        employee = await UnitOfWork(session).employees.get_by_document("1002")
        assert employee.status == EmployeeStatus.ON_VACATION.value
        assert employee.education_level == EducationLevel.SPECIALIZATION.value
        assert employee.hire_date == date(2021, 1, 15)
        assert employee.salary == Decimal("6200000")
        assert employee.job_title.name == "Desarrollador"

    async def test_existing_document_is_updated(self, session) -> None:
        existing = await add_employee(session, document="1001", email="marta@example.com")
        content = workbook_bytes(sheet_row("1001", "marta@example.com", phone="3100000000"))

        result = await ExcelImportService(session).import_employees(content)

        assert (result.inserted, result.updated, result.errors) == (0, 1, 0)
        await session.refresh(existing)
        assert existing.phone == "3100000000"
        assert existing.first_names == "Marta"

    async def test_bad_row_does_not_stop_later_rows(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com"),
            sheet_row("1002", "jorge@example.com", birth_date="31/02/1990"),
            sheet_row("1003", "luisa@example.com"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.committed
        assert not result.success
        assert (result.total_rows, result.inserted, result.errors) == (3, 2, 1)
        assert result.messages[1] == "Fila 3: Fecha de nacimiento inválida (documento 1002)"
        uow = UnitOfWork(session)
        assert await uow.employees.get_by_document("1003") is not None
        assert await uow.employees.get_by_document("1002") is None

    async def test_out_of_range_serial_date_is_a_row_error(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com", birth_date=99999999),
            sheet_row("1002", "jorge@example.com"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.committed
        assert (result.inserted, result.errors) == (1, 1)
        assert result.messages[1] == "Fila 2: Fecha de nacimiento inválida (documento 1001)"

    async def test_unexpected_row_failure_does_not_stop_import(self, session, monkeypatch) -> None:
        def explode_on_unknown(value):
            if value == "Desconocido":
                raise RuntimeError("unexpected cell")
            return EmployeeStatus.ACTIVE

        monkeypatch.setattr(import_service, "parse_status", explode_on_unknown)
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com", status="Desconocido"),
            sheet_row("1002", "jorge@example.com"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.committed
        assert (result.inserted, result.errors) == (1, 1)
        assert result.messages[1].startswith("Fila 2: Error inesperado al procesar la fila")
        assert await UnitOfWork(session).employees.get_by_document("1002") is not None

    async def test_unknown_catalog_names_are_row_errors(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com", department="Finanzas"),
            sheet_row("1002", "jorge@example.com", job_title="Astronauta"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.errors == 2
        assert "Departamento 'Finanzas' no encontrado" in result.messages[1]
        assert "Cargo 'Astronauta' no encontrado" in result.messages[2]

    async def test_catalog_names_match_without_accents_or_case(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com", department="  TECNOLOGIA ", job_title="soporte tecnico"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.inserted == 1
        employee = await UnitOfWork(session).employees.get_by_document("1001")
        assert employee.department.name == "Tecnología"
        assert employee.job_title.name == "Soporte Técnico"

    async def test_email_owned_by_other_employee_is_row_error(self, session) -> None:
        await add_employee(session, document="9", email="marta@example.com")
        content = workbook_bytes(sheet_row("1001", "MARTA@example.com"))

        result = await ExcelImportService(session).import_employees(content)

        assert (result.inserted, result.errors) == (0, 1)
        assert "ya está registrado para otro empleado" in result.messages[1]

    async def test_rows_without_document_are_skipped(self, session) -> None:
        content = workbook_bytes(
            sheet_row("1001", "marta@example.com"),
            sheet_row(None, "nadie@example.com"),
        )

        result = await ExcelImportService(session).import_employees(content)

        assert result.total_rows == 1
        assert result.inserted == 1

    async def test_invalid_salary_defaults_to_zero(self, session) -> None:
        content = workbook_bytes(sheet_row("1001", "marta@example.com", salary="no aplica"))

        await ExcelImportService(session).import_employees(content)

        employee = await UnitOfWork(session).employees.get_by_document("1001")
        assert employee.salary == Decimal("0")

    async def test_not_a_workbook(self, session) -> None:
        with pytest.raises(InvalidImportFileError):
            await ExcelImportService(session).import_employees(b"documento;nombres\n1;Ana")

    async def test_empty_file(self, session) -> None:
        with pytest.raises(InvalidImportFileError):
            await ExcelImportService(session).import_employees(b"")
