"""Employee authentication router: self-registration and bearer-token login."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from talento_api.dependencies import get_auth_service
from talento_api.exceptions import AuthenticationError, ConflictError, NotFoundError
from talento_api.models.dto.auth import (
    EmployeeLoginRequest,
    EmployeeRegisterRequest,
    TokenResponse,
)
from talento_api.models.dto.common import ApiResponse
from talento_api.models.dto.employee import EmployeeResponse
from talento_api.security.rate_limit import (
    AUTH_LOGIN_LIMIT,
    AUTH_REGISTER_LIMIT,
    get_real_client_ip,
    limiter,
)
from talento_api.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/registro",
    response_model=ApiResponse[EmployeeResponse],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(AUTH_REGISTER_LIMIT)
async def register(
    request: Request,
    body: EmployeeRegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[EmployeeResponse]:
    """Register a new employee.

    The account starts inactive; an administrator activates it before the
    employee can log in.
    """
    try:
        employee = await auth_service.register(body, ip_address=get_real_client_ip(request))
    except (ConflictError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

    return ApiResponse.ok(
        data=employee,
        message="Registro exitoso. Se ha enviado un correo de bienvenida.",
    )


@router.post("/login", response_model=ApiResponse[TokenResponse])
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    body: EmployeeLoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[TokenResponse]:
    """Exchange document number and email for a bearer token."""
    try:
        token = await auth_service.login(
            body.document.strip(),
            str(body.email),
            ip_address=get_real_client_ip(request),
        )
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    return ApiResponse.ok(data=token, message="Inicio de sesión exitoso")
