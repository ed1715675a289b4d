"""Admin console account pages: login, first-admin registration, logout."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import Response
from pydantic import ValidationError as PydanticValidationError

from talento_api.dependencies import get_admin_auth_service
from talento_api.exceptions import AdministratorAlreadyExistsError, AuthenticationError
from talento_api.models.dto.auth import AdminLoginRequest, AdminRegisterRequest
from talento_api.security.auth import end_admin_session, get_session_admin, start_admin_session
from talento_api.security.csrf import validate_csrf
from talento_api.security.rate_limit import AUTH_LOGIN_LIMIT, get_real_client_ip, limiter
from talento_api.services.admin_auth_service import AdminAuthService
from talento_api.utils.security_events import SecurityEventType, log_security_event
from talento_api.web import flash, redirect, render, safe_return_url

logger = logging.getLogger(__name__)

router = APIRouter()


def _form_errors(exc: PydanticValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        msg = error["msg"].removeprefix("Value error, ")
        # Policy messages come back joined
        messages.extend(part.strip() for part in msg.split(";") if part.strip())
    return messages


@router.get("/Login")
async def login_page(
    request: Request,
    auth_service: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
    return_url: Annotated[str | None, Query(alias="returnUrl")] = None,
) -> Response:
    """Show the login form, or go straight to the dashboard when signed in."""
    if get_session_admin(request) is not None:
        return redirect("/Dashboard")
    return render(
        request,
        "account/login.html",
        {
            "return_url": return_url or "",
            "email": "",
            "errors": [],
            "can_register": not await auth_service.administrator_exists(),
        },
    )


@router.post("/Login", dependencies=[Depends(validate_csrf)])
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    auth_service: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    return_url: Annotated[str, Form()] = "",
) -> Response:
    """Sign an administrator in."""

    def show_errors(errors: list[str]) -> Response:
        return render(
            request,
            "account/login.html",
            {"return_url": return_url, "email": email, "errors": errors, "can_register": False},
        )

    try:
        credentials = AdminLoginRequest(email=email.strip(), password=password)
    except PydanticValidationError:
        return show_errors(["Ingrese un email y una contraseña válidos."])

    try:
        admin = await auth_service.authenticate(
            str(credentials.email),
            credentials.password,
            ip_address=get_real_client_ip(request),
        )
    except AuthenticationError as e:
        return show_errors([e.message])

    start_admin_session(request, admin.id, admin.email, admin.name, admin.role.value)
    return redirect(safe_return_url(return_url))


@router.get("/Register")
async def register_page(
    request: Request,
    auth_service: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
) -> Response:
    """Show the first-administrator registration form."""
    if await auth_service.administrator_exists():
        flash(request, "Ya existe un administrador registrado. Contacte al administrador actual.", "error")
        return redirect("/Account/Login")
    return render(request, "account/register.html", {"form": {}, "errors": []})


@router.post("/Register", dependencies=[Depends(validate_csrf)])
async def register(
    request: Request,
    auth_service: Annotated[AdminAuthService, Depends(get_admin_auth_service)],
    first_names: Annotated[str, Form()] = "",
    last_names: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    confirm_password: Annotated[str, Form()] = "",
) -> Response:
    """Create the first administrator and sign them in."""
    form = {"first_names": first_names, "last_names": last_names, "email": email}
    try:
        data = AdminRegisterRequest(
            first_names=first_names.strip(),
            last_names=last_names.strip(),
            email=email.strip(),
            password=password,
            confirm_password=confirm_password,
        )
    except PydanticValidationError as e:
        return render(request, "account/register.html", {"form": form, "errors": _form_errors(e)})

    try:
        admin = await auth_service.register_first_admin(data, ip_address=get_real_client_ip(request))
    except AdministratorAlreadyExistsError:
        return render(
            request,
            "account/register.html",
            {
                "form": form,
                "errors": ["Ya existe un administrador registrado. Contacte al administrador actual."],
            },
        )

    start_admin_session(request, admin.id, admin.email, admin.name, admin.role.value)
    flash(request, f"Bienvenido, {admin.name}.")
    return redirect("/Dashboard")


@router.post("/Logout", dependencies=[Depends(validate_csrf)])
async def logout(request: Request) -> Response:
    """Sign out and return to the login page."""
    admin = get_session_admin(request)
    if admin is not None:
        log_security_event(
            SecurityEventType.LOGOUT,
            user_id=admin.id,
            user_email=admin.email,
            ip_address=get_real_client_ip(request),
        )
    end_admin_session(request)
    return redirect("/Account/Login")
