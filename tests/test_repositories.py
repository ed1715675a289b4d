"""Repository and unit of work tests."""

import pytest
from sqlalchemy.exc import IntegrityError

from talento_api.models.domain.employee import EmployeeStatus
from talento_api.models.orm import EmployeeORM
from talento_api.repositories.unit_of_work import UnitOfWork
from tests.factories import add_employee, employee_row


class TestBaseRepository:
    """Generic CRUD behaviour shared by every repository."""

    async def test_create_is_staged_until_save(self, session) -> None:
        uow = UnitOfWork(session)
        values = employee_row()

        employee = await uow.employees.create(**values)
        assert employee.id is None

        await uow.save_changes()
        assert employee.id is not None
        assert await uow.employees.count() == 1

    async def test_get_all_pages_by_id(self, session) -> None:
        uow = UnitOfWork(session)
        departments = await uow.departments.get_all()
        assert [d.id for d in departments] == [1, 2, 3, 4, 5, 6, 7]

        page = await uow.departments.get_all(offset=2, limit=3)
        assert [d.id for d in page] == [3, 4, 5]

    async def test_exists_and_count_with_criteria(self, session) -> None:
        await add_employee(session)
        await add_employee(
            session,
            document="99",
            email="otro@example.com",
            status=EmployeeStatus.INACTIVE,
        )
        uow = UnitOfWork(session)

        assert await uow.employees.exists(EmployeeORM.document == "99")
        assert not await uow.employees.exists(EmployeeORM.document == "100")
        assert await uow.employees.count(EmployeeORM.status == "inactive") == 1
        assert await uow.employees.count() == 2

    async def test_delete(self, session) -> None:
        employee = await add_employee(session)
        uow = UnitOfWork(session)

        await uow.employees.delete(employee)
        await uow.save_changes()

        assert await uow.employees.get_by_id(employee.id) is None


class TestTimestamps:
    """Audit timestamps are stamped on flush."""

    async def test_created_at_set_on_insert(self, session) -> None:
        employee = await add_employee(session)
        assert employee.created_at is not None
        assert employee.updated_at is None

    async def test_updated_at_set_on_change(self, session) -> None:
        employee = await add_employee(session)
        uow = UnitOfWork(session)

        await uow.employees.update(employee, phone="3110000000")
        await uow.save_changes()

        assert employee.updated_at is not None


class TestEmployeeRepository:
    """Employee lookups."""

    async def test_email_lookup_is_case_insensitive(self, session) -> None:
        await add_employee(session, email="ana.gomez@example.com")
        uow = UnitOfWork(session)

        found = await uow.employees.get_by_email("  ANA.Gomez@Example.com ")
        assert found is not None
        assert found.department.name == "Tecnología"

    async def test_document_and_email_must_match_same_record(self, session) -> None:
        await add_employee(session, document="1", email="uno@example.com")
        await add_employee(session, document="2", email="dos@example.com")
        uow = UnitOfWork(session)

        assert await uow.employees.get_by_document_and_email("1", "uno@example.com")
        assert await uow.employees.get_by_document_and_email("1", "dos@example.com") is None

    async def test_taken_checks_exclude_own_record(self, session) -> None:
        employee = await add_employee(session)
        uow = UnitOfWork(session)

        assert await uow.employees.document_taken(employee.document)
        assert not await uow.employees.document_taken(employee.document, exclude_id=employee.id)
        assert await uow.employees.email_taken(employee.email.upper())
        assert not await uow.employees.email_taken(employee.email, exclude_id=employee.id)

    async def test_list_ordered_by_last_then_first_names(self, session) -> None:
        await add_employee(session, document="1", email="a@example.com", last_names="Zapata", first_names="Luis")
        await add_employee(session, document="2", email="b@example.com", last_names="Arango", first_names="Pedro")
        await add_employee(session, document="3", email="c@example.com", last_names="Arango", first_names="Juan")
        uow = UnitOfWork(session)

        employees = await uow.employees.get_all_with_details()
        assert [e.document for e in employees] == ["3", "2", "1"]

    async def test_count_by_job_title_name(self, session) -> None:
        await add_employee(session, document="1", email="a@example.com", job_title_id=3)
        await add_employee(session, document="2", email="b@example.com", job_title_id=2)
        uow = UnitOfWork(session)

        assert await uow.employees.count_by_job_title_name("auxiliar") == 1

    async def test_filters_by_department_job_title_and_status(self, session) -> None:
        await add_employee(session, document="1", email="a@example.com", department_id=6, job_title_id=5)
        await add_employee(
            session,
            document="2",
            email="b@example.com",
            department_id=7,
            job_title_id=5,
            status=EmployeeStatus.ON_VACATION,
        )
        uow = UnitOfWork(session)

        assert [e.document for e in await uow.employees.get_by_department(6)] == ["1"]
        assert await uow.employees.count_by_department(7) == 1
        assert len(await uow.employees.get_by_job_title(5)) == 2
        on_vacation = await uow.employees.get_by_status(EmployeeStatus.ON_VACATION)
        assert [e.document for e in on_vacation] == ["2"]
        assert on_vacation[0].department.name == "Ventas"


class TestCatalogRepository:
    """Department and job title queries."""

    async def test_get_by_name_is_case_insensitive(self, session) -> None:
        uow = UnitOfWork(session)
        department = await uow.departments.get_by_name("recursos humanos")
        assert department is not None
        assert department.id == 5

    async def test_employee_counts(self, session) -> None:
        await add_employee(session, document="1", email="a@example.com", department_id=6)
        await add_employee(session, document="2", email="b@example.com", department_id=6)
        uow = UnitOfWork(session)

        counts = {d.name: count for d, count in await uow.departments.get_all_with_employee_count()}
        assert counts["Tecnología"] == 2
        assert counts["Ventas"] == 0
        assert await uow.departments.has_employees(6)
        assert not await uow.departments.has_employees(7)


class TestUnitOfWork:
    """Explicit transactions."""

    async def test_rollback_discards_flushed_rows(self, session) -> None:
        uow = UnitOfWork(session)
        await uow.begin_transaction()
        values = employee_row()
        await uow.employees.create(**values)
        await uow.save_changes()
        assert uow.in_transaction

        await uow.rollback_transaction()

        assert not uow.in_transaction
        assert await uow.employees.count() == 0

    async def test_nested_begin_is_refused(self, session) -> None:
        uow = UnitOfWork(session)
        await uow.begin_transaction()
        with pytest.raises(RuntimeError):
            await uow.begin_transaction()
        await uow.rollback_transaction()

    async def test_commit_without_transaction_is_refused(self, session) -> None:
        uow = UnitOfWork(session)
        with pytest.raises(RuntimeError):
            await uow.commit_transaction()

    async def test_integrity_error_propagates(self, session) -> None:
        await add_employee(session)
        uow = UnitOfWork(session)
        values = employee_row(email="otra@example.com")
        await uow.employees.create(**values)

        with pytest.raises(IntegrityError):
            await uow.save_changes()
