"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware

from talento_api import __version__
from talento_api.config import get_settings
from talento_api.database import engine
from talento_api.exceptions import AdminSessionRequiredError
from talento_api.middleware.error_handler import (
    admin_session_required_handler,
    generic_exception_handler,
    http_exception_handler,
    rate_limit_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from talento_api.routers import (
    admin_account,
    admin_dashboard,
    admin_employees,
    auth,
    departments,
    employees,
)
from talento_api.security.rate_limit import limiter
from talento_api.web import redirect

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        # Console pages load Bootstrap from a CDN and use small inline scripts
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
            "img-src 'self' data:; "
            "font-src 'self' https://cdn.jsdelivr.net; "
            "connect-src 'self'"
        )
        if not get_settings().debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} ({settings.environment})")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="TalentoPlus human resources API and admin console",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)

    # Sanitized error handlers to prevent information disclosure
    app.add_exception_handler(AdminSessionRequiredError, admin_session_required_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = config.cors_origins_list
    if "*" in allowed_origins:
        raise ValueError(
            "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
            "Specify explicit origins."
        )

    # Middleware runs in reverse order of addition: CORS -> Session -> SecurityHeaders
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret,
        session_cookie=config.session_cookie_name,
        max_age=config.session_max_age_hours * 3600,
        same_site="lax",
        https_only=config.session_cookie_secure,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-CSRF-Token"],
    )

    # Public REST API
    app.include_router(auth.router, prefix="/api/Auth", tags=["Auth"])
    app.include_router(employees.router, prefix="/api/Empleados", tags=["Empleados"])
    app.include_router(departments.router, prefix="/api/Departamentos", tags=["Departamentos"])

    # Admin console
    app.include_router(
        admin_account.router, prefix="/Account", tags=["Console"], include_in_schema=False
    )
    app.include_router(
        admin_employees.router, prefix="/Empleados", tags=["Console"], include_in_schema=False
    )
    app.include_router(
        admin_dashboard.router, prefix="/Dashboard", tags=["Console"], include_in_schema=False
    )

    @app.get("/", include_in_schema=False)
    async def home() -> Response:
        """Console entry point."""
        return redirect("/Dashboard")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
