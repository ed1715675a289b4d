"""Public department catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from talento_api.dependencies import get_catalog_service
from talento_api.exceptions import DepartmentNotFoundError
from talento_api.models.dto.catalog import DepartmentResponse
from talento_api.models.dto.common import ApiResponse
from talento_api.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[DepartmentResponse]])
async def list_departments(
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse[list[DepartmentResponse]]:
    """List departments with their employee counts, ordered by name."""
    departments = await catalog_service.list_departments()
    return ApiResponse.ok(data=departments)


@router.get("/{department_id}", response_model=ApiResponse[DepartmentResponse])
async def get_department(
    department_id: int,
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ApiResponse[DepartmentResponse]:
    """Get one department."""
    try:
        department = await catalog_service.get_department(department_id)
    except DepartmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return ApiResponse.ok(data=department)
