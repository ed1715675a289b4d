"""Self-service endpoints for the authenticated employee."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from talento_api.dependencies import get_employee_service, get_pdf_service
from talento_api.exceptions import EmployeeNotFoundError, PdfGenerationError
from talento_api.models.domain.employee import EmployeePrincipal
from talento_api.models.dto.common import ApiResponse
from talento_api.models.dto.employee import EmployeeProfileResponse
from talento_api.security.auth import get_current_employee
from talento_api.services.employee_service import EmployeeService
from talento_api.services.pdf_service import PdfService, resume_filename

router = APIRouter()


@router.get("/me", response_model=ApiResponse[EmployeeProfileResponse])
async def get_my_profile(
    principal: Annotated[EmployeePrincipal, Depends(get_current_employee)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> ApiResponse[EmployeeProfileResponse]:
    """Get the profile of the employee holding the token."""
    try:
        profile = await employee_service.get_profile(principal.employee_id)
    except EmployeeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ApiResponse.ok(data=profile)


@router.get(
    "/me/hoja-vida",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_my_resume(
    principal: Annotated[EmployeePrincipal, Depends(get_current_employee)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    pdf_service: Annotated[PdfService, Depends(get_pdf_service)],
) -> Response:
    """Download the authenticated employee's resume as a PDF."""
    try:
        employee = await employee_service.get_employee_orm(principal.employee_id)
    except EmployeeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e

    try:
        content = pdf_service.generate_resume(employee)
    except PdfGenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        ) from e

    filename = resume_filename(employee.document)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
