"""Global error handling to prevent information disclosure.

Responses under ``/api`` use the ``ApiResponse`` envelope; console pages get
a redirect (missing admin session) or a short JSON detail.
"""

import logging
from typing import Any
from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from talento_api.config import get_settings
from talento_api.exceptions import AdminSessionRequiredError
from talento_api.models.dto.common import ApiResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
LOGIN_PATH = "/Account/Login"

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Solicitud inválida",
    401: "Autenticación requerida",
    403: "Acceso denegado",
    404: "Recurso no encontrado",
    405: "Método no permitido",
    409: "Conflicto con un recurso existente",
    422: "Datos de entrada inválidos",
    429: "Demasiadas solicitudes. Intente nuevamente en un momento.",
    500: "Error interno del servidor",
    503: "Servicio no disponible temporalmente",
}

# Error messages that are safe to pass through
# These don't reveal internal implementation details
ALLOWED_ERROR_PATTERNS = [
    "Autenticación requerida",
    "Token inválido o expirado",
    "Acceso denegado",
    "Credenciales inválidas",
    "no encontrado",
    "Ya existe",
    "Error al generar la hoja de vida",
    "CSRF token missing",
    "Invalid or expired CSRF token",
    "CSRF token mismatch",
]


def is_api_request(request: Request) -> bool:
    """Whether the request targets the JSON API."""
    return request.url.path.startswith(API_PREFIX)


def envelope_response(
    status_code: int,
    message: str,
    errors: list[str] | None = None,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an ``ApiResponse`` JSON response.

    A 2xx status produces a success envelope; anything else a failure.
    """
    if 200 <= status_code < 300:
        body = ApiResponse.ok(data=data, message=message)
    else:
        body = ApiResponse.fail(message, errors)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


def is_safe_error_message(message: str) -> bool:
    """Check if an error message is safe to expose to users.

    Args:
        message: Error message to check

    Returns:
        True if message is safe to expose
    """
    message_lower = message.lower()
    return any(pattern.lower() in message_lower for pattern in ALLOWED_ERROR_PATTERNS)


def validation_messages(errors: list[dict[str, Any]]) -> list[str]:
    """Flatten pydantic errors into "field: message" strings."""
    messages = []
    for error in errors:
        loc = error.get("loc", ())
        field = loc[-1] if loc else "campo"
        msg = error.get("msg", "Valor inválido")
        # pydantic prefixes custom validator messages
        msg = msg.removeprefix("Value error, ")
        if isinstance(field, str) and not field.startswith("_"):
            messages.append(f"{field}: {msg}")
        else:
            messages.append(msg)
    return messages


async def admin_session_required_handler(
    request: Request, exc: AdminSessionRequiredError
) -> Response:
    """Send console visitors without an administrator session to the login page."""
    query = urlencode({"returnUrl": exc.return_url}) if exc.return_url else ""
    target = f"{LOGIN_PATH}?{query}" if query else LOGIN_PATH
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with sanitized messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    settings = get_settings()
    detail = exc.detail if isinstance(exc.detail, str) else ""
    if not settings.debug and not is_safe_error_message(detail):
        detail = SAFE_ERROR_MESSAGES.get(exc.status_code, "La solicitud falló")
    headers = getattr(exc, "headers", None)

    if is_api_request(request):
        return envelope_response(exc.status_code, detail, headers=headers)
    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors.

    API requests get a 400 envelope listing every invalid field.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with the validation messages
    """
    logger.warning(f"Validation error for {request.url.path}: {len(exc.errors())} error(s)")
    messages = validation_messages(list(exc.errors()))

    if is_api_request(request):
        return envelope_response(
            status.HTTP_400_BAD_REQUEST,
            "Datos de entrada inválidos",
            errors=messages,
        )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "; ".join(messages[:3])},
    )


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit violations."""
    logger.warning(f"Rate limit exceeded for {request.url.path}")
    message = SAFE_ERROR_MESSAGES[429]
    if is_api_request(request):
        return envelope_response(status.HTTP_429_TOO_MANY_REQUESTS, message)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": message},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    logger.error(f"Database error for {request.url.path}: {type(exc).__name__}", exc_info=True)

    if isinstance(exc, IntegrityError):
        status_code = status.HTTP_400_BAD_REQUEST
        message = "El registro entra en conflicto con datos existentes"
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        message = "Error de base de datos"

    if is_api_request(request):
        return envelope_response(status_code, message)
    return JSONResponse(status_code=status_code, content={"detail": message})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    settings = get_settings()
    logger.error(f"Unhandled exception for {request.url.path}", exc_info=True)

    message = SAFE_ERROR_MESSAGES[500]
    errors = [f"{type(exc).__name__}: {exc}"] if settings.debug else None

    if is_api_request(request):
        return envelope_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": message},
    )
