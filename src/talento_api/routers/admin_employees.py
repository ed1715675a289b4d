"""Admin console employee pages: CRUD, resume download and Excel import."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError as PydanticValidationError

from talento_api.dependencies import (
    get_catalog_service,
    get_employee_service,
    get_import_service,
    get_pdf_service,
)
from talento_api.exceptions import (
    ConflictError,
    EmployeeNotFoundError,
    InvalidImportFileError,
    NotFoundError,
    PdfGenerationError,
)
from talento_api.models.domain.admin_user import AdminUser
from talento_api.models.domain.employee import EducationLevel, EmployeeStatus
from talento_api.models.dto.employee import EmployeeCreate, EmployeeUpdate
from talento_api.security.auth import require_administrator
from talento_api.security.csrf import validate_csrf
from talento_api.security.rate_limit import get_real_client_ip
from talento_api.services.catalog_service import CatalogService
from talento_api.services.employee_service import EmployeeService
from talento_api.services.import_service import ExcelImportService
from talento_api.services.pdf_service import PdfService, resume_filename
from talento_api.utils.security_events import SecurityEventType, log_security_event
from talento_api.web import flash, redirect, render

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_administrator)])

ALLOWED_IMPORT_EXTENSIONS = (".xlsx", ".xls")

FORM_FIELDS = (
    "document",
    "first_names",
    "last_names",
    "birth_date",
    "address",
    "phone",
    "email",
    "salary",
    "hire_date",
    "status",
    "education_level",
    "professional_profile",
    "department_id",
    "job_title_id",
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
    "status": "Estado",
    "education_level": "Nivel educativo",
    "professional_profile": "Perfil profesional",
    "department_id": "Departamento",
    "job_title_id": "Cargo",
}


async def _read_employee_form(request: Request) -> dict[str, Any]:
    """Collect the employee fields of a submitted form as strings."""
    form = await request.form()
    values: dict[str, Any] = {}
    for field in FORM_FIELDS:
        value = form.get(field)
        values[field] = value.strip() if isinstance(value, str) else ""
    return values


def _field_errors(exc: PydanticValidationError) -> dict[str, str]:
    """Map validation errors to a message per form field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else ""
        if field in errors:
            continue
        msg = error["msg"].removeprefix("Value error, ")
        if error["type"] in ("missing", "string_too_short"):
            msg = "El campo es requerido"
        elif error["type"].startswith(("date_", "int_", "decimal_", "enum")):
            msg = "Valor inválido"
        errors[field] = f"{FIELD_LABELS.get(field, field)}: {msg}"
    return errors


def _validate_form(values: dict[str, Any], model: type[EmployeeCreate] | type[EmployeeUpdate]):
    data = {key: value for key, value in values.items() if value != ""}
    if "education_level" in data and str(data["education_level"]).isdigit():
        data["education_level"] = int(data["education_level"])
    return model.model_validate(data)


async def _form_page(
    request: Request,
    catalog_service: CatalogService,
    template: str,
    form: dict[str, Any],
    errors: dict[str, str] | None = None,
    employee_id: int | None = None,
) -> Response:
    return render(
        request,
        template,
        {
            "form": form,
            "errors": errors or {},
            "employee_id": employee_id,
            "departments": await catalog_service.list_departments(),
            "job_titles": await catalog_service.list_job_titles(),
            "statuses": list(EmployeeStatus),
            "education_levels": list(EducationLevel),
        },
    )


@router.get("")
async def list_employees(
    request: Request,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Employee list ordered by last names."""
    employees = await employee_service.list_employees()
    return render(request, "employees/index.html", {"employees": employees})


@router.get("/Details/{employee_id}")
async def employee_details(
    request: Request,
    employee_id: int,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Full employee record."""
    try:
        employee = await employee_service.get_employee(employee_id)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")
    return render(request, "employees/details.html", {"employee": employee})


@router.get("/Create")
async def create_page(
    request: Request,
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Blank employee form."""
    form = {field: "" for field in FORM_FIELDS}
    form["status"] = EmployeeStatus.ACTIVE.value
    form["education_level"] = str(EducationLevel.TECHNICIAN.value)
    return await _form_page(request, catalog_service, "employees/create.html", form)


@router.post("/Create", dependencies=[Depends(validate_csrf)])
async def create_employee(
    request: Request,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Create an employee from the form."""
    form = await _read_employee_form(request)
    try:
        data = _validate_form(form, EmployeeCreate)
    except PydanticValidationError as e:
        return await _form_page(
            request, catalog_service, "employees/create.html", form, _field_errors(e)
        )

    try:
        await employee_service.create_employee(data)
    except (ConflictError, NotFoundError) as e:
        return await _form_page(
            request, catalog_service, "employees/create.html", form, {"general": e.message}
        )

    flash(request, "Empleado creado exitosamente")
    return redirect("/Empleados")


@router.get("/Edit/{employee_id}")
async def edit_page(
    request: Request,
    employee_id: int,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Employee form filled with the current record."""
    try:
        employee = await employee_service.get_employee(employee_id)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")

    form = {field: getattr(employee, field) for field in FORM_FIELDS}
    form["status"] = employee.status.value
    form["education_level"] = str(employee.education_level.value)
    form["professional_profile"] = employee.professional_profile or ""
    return await _form_page(
        request, catalog_service, "employees/edit.html", form, employee_id=employee_id
    )


@router.post("/Edit/{employee_id}", dependencies=[Depends(validate_csrf)])
async def update_employee(
    request: Request,
    employee_id: int,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Response:
    """Replace an employee record from the form."""
    form = await _read_employee_form(request)
    try:
        data = _validate_form(form, EmployeeUpdate)
    except PydanticValidationError as e:
        return await _form_page(
            request,
            catalog_service,
            "employees/edit.html",
            form,
            _field_errors(e),
            employee_id=employee_id,
        )

    try:
        await employee_service.update_employee(employee_id, data)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")
    except (ConflictError, NotFoundError) as e:
        return await _form_page(
            request,
            catalog_service,
            "employees/edit.html",
            form,
            {"general": e.message},
            employee_id=employee_id,
        )

    flash(request, "Empleado actualizado exitosamente")
    return redirect("/Empleados")


@router.get("/Delete/{employee_id}")
async def delete_page(
    request: Request,
    employee_id: int,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Ask for confirmation before deleting."""
    try:
        employee = await employee_service.get_employee(employee_id)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")
    return render(request, "employees/delete.html", {"employee": employee})


@router.post("/Delete/{employee_id}", dependencies=[Depends(validate_csrf)])
async def delete_employee(
    request: Request,
    employee_id: int,
    admin: Annotated[AdminUser, Depends(require_administrator)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Delete an employee."""
    try:
        await employee_service.delete_employee(employee_id)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")

    log_security_event(
        SecurityEventType.EMPLOYEE_DELETED,
        user_id=admin.id,
        user_email=admin.email,
        ip_address=get_real_client_ip(request),
        details={"employee_id": employee_id},
    )
    flash(request, "Empleado eliminado exitosamente")
    return redirect("/Empleados")


@router.get("/DescargarPdf/{employee_id}")
async def download_resume(
    request: Request,
    employee_id: int,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    pdf_service: Annotated[PdfService, Depends(get_pdf_service)],
) -> Response:
    """Download an employee's resume as a PDF."""
    try:
        employee = await employee_service.get_employee_orm(employee_id)
    except EmployeeNotFoundError as e:
        flash(request, e.message, "error")
        return redirect("/Empleados")

    try:
        content = pdf_service.generate_resume(employee)
    except PdfGenerationError as e:
        flash(request, e.message, "error")
        return redirect(f"/Empleados/Details/{employee_id}")

    filename = resume_filename(employee.document)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/Importar")
async def import_page(request: Request) -> Response:
    """Upload form for the Excel import."""
    return render(request, "employees/import.html", {"result": None, "error": None})


@router.post("/Importar", dependencies=[Depends(validate_csrf)])
async def import_employees(
    request: Request,
    admin: Annotated[AdminUser, Depends(require_administrator)],
    import_service: Annotated[ExcelImportService, Depends(get_import_service)],
    file: Annotated[UploadFile | None, File()] = None,
) -> Response:
    """Import employees from an uploaded workbook."""
    if file is None or not file.filename:
        return render(
            request,
            "employees/import.html",
            {"result": None, "error": "Seleccione un archivo Excel."},
        )
    if not file.filename.lower().endswith(ALLOWED_IMPORT_EXTENSIONS):
        return render(
            request,
            "employees/import.html",
            {"result": None, "error": "Solo se permiten archivos Excel (.xlsx, .xls)."},
        )

    content = await file.read()
    try:
        result = await import_service.import_employees(
            content,
            admin_email=admin.email,
            ip_address=get_real_client_ip(request),
        )
    except InvalidImportFileError as e:
        return render(request, "employees/import.html", {"result": None, "error": e.message})

    return render(request, "employees/import.html", {"result": result, "error": None})
