"""Authentication and authorization utilities.

Two independent schemes live here: bearer tokens for employees calling the
REST API, and the signed session cookie used by the admin console.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from talento_api.config import get_settings
from talento_api.exceptions import AdminSessionRequiredError
from talento_api.models.domain.admin_user import AdminUser, UserRole
from talento_api.models.domain.employee import EmployeePrincipal

# Session keys for the admin console
SESSION_USER_ID = "admin_user_id"
SESSION_USER_EMAIL = "admin_email"
SESSION_USER_NAME = "admin_name"
SESSION_USER_ROLE = "admin_role"

bearer_scheme = HTTPBearer(auto_error=False)


def create_employee_token(
    employee_id: int,
    document: str,
    email: str,
    first_names: str,
    last_names: str,
) -> tuple[str, datetime]:
    """Create a signed JWT for an employee.

    Args:
        employee_id: Employee ID
        document: Document number (used as subject)
        email: Employee email
        first_names: Employee first names
        last_names: Employee last names

    Returns:
        Tuple of (token, expiration time)
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_expiration_minutes)

    payload = {
        "sub": document,
        "email": email,
        "jti": str(uuid.uuid4()),
        "document": document,
        "first_names": first_names,
        "last_names": last_names,
        "employee_id": str(employee_id),
        "role": UserRole.EMPLOYEE.value,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": expire,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, expire


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT token.

    Signature, issuer, audience and expiry are all checked with no clock skew.

    Args:
        token: JWT token string

    Returns:
        Token payload

    Raises:
        HTTPException: If token is invalid or expired
    """
    settings = get_settings()

    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={"leeway": 0, "require_exp": True, "require_iat": True},
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido o expirado",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def get_current_employee(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> EmployeePrincipal:
    """Get the authenticated employee from the bearer token.

    Raises:
        HTTPException: If the token is missing, invalid or not an employee token
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Autenticación requerida",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)

    if payload.get("role") != UserRole.EMPLOYEE.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acceso denegado",
        )

    try:
        return EmployeePrincipal(
            employee_id=int(payload["employee_id"]),
            document=payload["document"],
            email=payload["email"],
            first_names=payload.get("first_names", ""),
            last_names=payload.get("last_names", ""),
            role=payload["role"],
        )
    except (KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido o expirado",
        ) from e


def start_admin_session(request: Request, user_id: int, email: str, name: str | None, role: str) -> None:
    """Store the signed-in administrator in the session cookie."""
    request.session.clear()
    request.session[SESSION_USER_ID] = user_id
    request.session[SESSION_USER_EMAIL] = email
    request.session[SESSION_USER_NAME] = name
    request.session[SESSION_USER_ROLE] = role


def end_admin_session(request: Request) -> None:
    """Forget the signed-in administrator."""
    request.session.clear()


def get_session_admin(request: Request) -> AdminUser | None:
    """Read the administrator from the session cookie, if any."""
    user_id = request.session.get(SESSION_USER_ID)
    role = request.session.get(SESSION_USER_ROLE)
    if user_id is None or role is None:
        return None
    try:
        return AdminUser(
            id=int(user_id),
            email=request.session.get(SESSION_USER_EMAIL, ""),
            name=request.session.get(SESSION_USER_NAME),
            role=UserRole(role),
        )
    except ValueError:
        return None


async def require_administrator(request: Request) -> AdminUser:
    """Require an administrator session for console pages.

    Raises:
        AdminSessionRequiredError: Redirected to the login page by the error handler
    """
    admin = get_session_admin(request)
    if admin is None or admin.role != UserRole.ADMINISTRATOR:
        raise AdminSessionRequiredError(return_url=request.url.path)
    return admin
