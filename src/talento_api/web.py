"""Server-rendered admin console helpers: templates, flash messages, redirects."""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from talento_api.config import get_settings
from talento_api.security.auth import get_session_admin
from talento_api.security.csrf import get_csrf_token

TEMPLATES_DIR = Path(__file__).parent / "templates"

FLASH_SESSION_KEY = "_flashes"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _format_cop(value: Any) -> str:
    return "$ " + f"{value:,.0f}".replace(",", ".")


templates.env.filters["cop"] = _format_cop
templates.env.filters["dmy"] = lambda value: value.strftime("%d/%m/%Y") if value else ""


def flash(request: Request, message: str, category: str = "success") -> None:
    """Queue a one-time message for the next rendered page."""
    messages = list(request.session.get(FLASH_SESSION_KEY, []))
    messages.append({"category": category, "message": message})
    request.session[FLASH_SESSION_KEY] = messages


def pop_flashed_messages(request: Request) -> list[dict[str, str]]:
    """Take all queued messages out of the session."""
    return request.session.pop(FLASH_SESSION_KEY, [])


def redirect(url: str) -> RedirectResponse:
    """Post/redirect/get redirect."""
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def safe_return_url(url: str | None, default: str = "/Dashboard") -> str:
    """Only allow local return URLs (no scheme, no protocol-relative //host)."""
    if url and url.startswith("/") and not url.startswith("//") and "\\" not in url:
        return url
    return default


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    """Render a console template with the shared layout context.

    Every page gets the signed-in administrator, the session CSRF token,
    pending flash messages and the company name.
    """
    page_context: dict[str, Any] = {
        "current_admin": get_session_admin(request),
        "csrf_token": get_csrf_token(request),
        "messages": pop_flashed_messages(request),
        "company_name": get_settings().company_name,
    }
    if context:
        page_context.update(context)
    return templates.TemplateResponse(request, name, page_context, status_code=status_code)
