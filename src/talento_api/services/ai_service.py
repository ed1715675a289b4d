"""Natural-language questions about the workforce, answered by Gemini."""

import json
import logging
from decimal import Decimal
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.config import Settings, get_settings
from talento_api.models.domain.employee import EmployeeStatus
from talento_api.models.dto.ai import AIQueryResult
from talento_api.models.orm.employee import EmployeeORM
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

RECENT_HIRES_LIMIT = 5

GENERATION_CONFIG = {
    "temperature": 0.3,
    "topP": 0.8,
    "topK": 40,
    "maxOutputTokens": 1024,
}

PROMPT_TEMPLATE = """Eres un asistente de RRHH para la empresa {company}. Tu trabajo es responder preguntas sobre los empleados y la organización basándote ÚNICAMENTE en los datos reales del sistema que te proporciono.

REGLAS IMPORTANTES:
1. NUNCA inventes datos. Solo usa la información que te proporciono.
2. Si no tienes información suficiente para responder, dilo claramente.
3. Responde de manera clara y concisa en español.
4. Si te preguntan por empleados específicos, busca en la lista de empleados.
5. Proporciona números exactos cuando sea posible.
6. Si te preguntan algo que no está en los datos (como predicciones futuras o datos personales sensibles), indica que no tienes esa información.

DATOS ACTUALES DEL SISTEMA:
{context}

PREGUNTA DEL USUARIO:
{query}

Responde de manera profesional y útil, basándote SOLO en los datos proporcionados."""


def _money(value: Decimal) -> float:
    return float(round(value, 2))


def build_prompt(query: str, context: dict[str, Any], company: str) -> str:
    """Embed the data snapshot and the question in the fixed instructions."""
    return PROMPT_TEMPLATE.format(
        company=company,
        context=json.dumps(context, ensure_ascii=False, indent=2),
        query=query,
    )


def extract_answer(payload: Any) -> str | None:
    """Pull the first candidate's text out of a generateContent response.

    Returns None when any level of the reply has an unexpected shape. The
    text itself is returned exactly as the model produced it.
    """
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class AIQueryService:
    """Answer dashboard questions from a live snapshot of the database.

    The model only ever sees aggregate figures and a summary line per
    employee; it is told to answer from that data alone.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Database session
            settings: Application settings
            transport: Optional httpx transport (used to stub the API in tests)
        """
        self.session = session
        self.uow = UnitOfWork(session)
        self.settings = settings or get_settings()
        self.transport = transport

    async def ask(self, query: str) -> AIQueryResult:
        """Answer a question about employees and the organization.

        Never raises: every failure comes back as an unsuccessful result
        with a Spanish message for the dashboard.
        """
        query = (query or "").strip()
        if not query:
            return AIQueryResult(success=False, error="La pregunta no puede estar vacía.")
        if not self.settings.ai_api_key:
            log_warning(logger, "AI query attempted without an API key")
            return AIQueryResult(
                success=False,
                error="La API Key de Gemini no está configurada.",
            )

        try:
            context = await self.build_context()
            prompt = build_prompt(query, context, self.settings.company_name)
            answer = await self._generate(prompt)
        except httpx.HTTPError as e:
            log_error(logger, "Gemini request failed", e)
            return AIQueryResult(
                success=False,
                error="No se pudo obtener respuesta de Gemini.",
            )
        except (AttributeError, TypeError, KeyError, IndexError) as e:
            log_error(logger, "Unexpected Gemini reply", e)
            return AIQueryResult(
                success=False,
                error="No se pudo obtener respuesta de Gemini.",
            )

        if answer is None:
            return AIQueryResult(success=False, error="No se pudo obtener respuesta de Gemini.")
        return AIQueryResult(success=True, response=answer)

    async def build_context(self) -> dict[str, Any]:
        """Snapshot of the workforce sent along with every question."""
        employees = await self.uow.employees.get_all_with_details()
        departments = await self.uow.departments.get_all_with_employee_count()
        job_titles = await self.uow.job_titles.get_all_with_employee_count()

        salaries = [e.salary for e in employees]
        by_level: dict[str, int] = {}
        for employee in employees:
            label = employee.education_enum.label
            by_level[label] = by_level.get(label, 0) + 1

        recent = sorted(employees, key=lambda e: e.hire_date, reverse=True)[:RECENT_HIRES_LIMIT]

        context: dict[str, Any] = {
            "totalEmpleados": len(employees),
            "empleadosActivos": sum(1 for e in employees if e.status_enum == EmployeeStatus.ACTIVE),
            "empleadosInactivos": sum(
                1 for e in employees if e.status_enum == EmployeeStatus.INACTIVE
            ),
            "empleadosVacaciones": sum(
                1 for e in employees if e.status_enum == EmployeeStatus.ON_VACATION
            ),
            "departamentos": [
                {"id": d.id, "nombre": d.name, "cantidadEmpleados": count}
                for d, count in departments
            ],
            "cargos": [
                {"id": j.id, "nombre": j.name, "cantidadEmpleados": count}
                for j, count in job_titles
            ],
            "empleadosPorNivelEducativo": [
                {"nivel": level, "cantidad": count} for level, count in by_level.items()
            ],
            "empleadosRecientes": [self._summary(e) for e in recent],
            "listaEmpleados": [self._detail(e) for e in employees],
        }
        if salaries:
            total = sum(salaries, Decimal("0"))
            context.update(
                salarioPromedio=_money(total / len(salaries)),
                salarioMaximo=_money(max(salaries)),
                salarioMinimo=_money(min(salaries)),
                sumaTotalSalarios=_money(total),
            )
        return context

    @staticmethod
    def _summary(employee: EmployeeORM) -> dict[str, Any]:
        return {
            "nombre": employee.full_name,
            "departamento": employee.department.name if employee.department else "Sin departamento",
            "cargo": employee.job_title.name if employee.job_title else "Sin cargo",
            "fechaIngreso": employee.hire_date.isoformat(),
            "estado": employee.status_enum.label,
        }

    @staticmethod
    def _detail(employee: EmployeeORM) -> dict[str, Any]:
        return {
            "id": employee.id,
            "documento": employee.document,
            "nombreCompleto": employee.full_name,
            "email": employee.email,
            "departamento": employee.department.name if employee.department else "Sin departamento",
            "cargo": employee.job_title.name if employee.job_title else "Sin cargo",
            "salario": _money(employee.salary),
            "fechaIngreso": employee.hire_date.isoformat(),
            "estado": employee.status_enum.label,
            "nivelEducativo": employee.education_enum.label,
        }

    async def _generate(self, prompt: str) -> str | None:
        """Call generateContent and return the answer text, or None."""
        url = f"{self.settings.ai_api_base_url.rstrip('/')}/models/{self.settings.ai_model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
        }
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.post(
                url,
                params={"key": self.settings.ai_api_key},
                json=body,
                timeout=float(self.settings.ai_timeout_seconds),
            )
        if response.status_code != 200:
            logger.error(f"Gemini API error: status={response.status_code}")
            return None
        try:
            payload = response.json()
        except ValueError as e:
            log_error(logger, "Gemini returned invalid JSON", e)
            return None
        return extract_answer(payload)
