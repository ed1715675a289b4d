"""Admin console dashboard: workforce totals and the AI assistant."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from talento_api.dependencies import get_ai_service, get_employee_service
from talento_api.models.dto.ai import AIQueryResult, AskAIRequest
from talento_api.security.auth import require_administrator
from talento_api.security.csrf import validate_csrf
from talento_api.security.rate_limit import AI_QUERY_LIMIT, limiter
from talento_api.services.ai_service import AIQueryService
from talento_api.services.employee_service import EmployeeService
from talento_api.web import render

router = APIRouter(dependencies=[Depends(require_administrator)])


@router.get("")
async def dashboard(
    request: Request,
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> Response:
    """Totals by status, department and job title."""
    stats = await employee_service.get_dashboard_stats()
    return render(request, "dashboard/index.html", {"stats": stats})


@router.post(
    "/AskAI",
    response_model=AIQueryResult,
    dependencies=[Depends(validate_csrf)],
)
@limiter.limit(AI_QUERY_LIMIT)
async def ask_ai(
    request: Request,
    body: AskAIRequest,
    ai_service: Annotated[AIQueryService, Depends(get_ai_service)],
) -> AIQueryResult:
    """Answer a free-text question about the workforce."""
    return await ai_service.ask(body.query)
