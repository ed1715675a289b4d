"""AI query service tests with a stubbed Gemini endpoint."""

import json
from decimal import Decimal

import httpx
import pytest

from talento_api.config import get_settings
from talento_api.models.domain.employee import EmployeeStatus
from talento_api.services.ai_service import AIQueryService, build_prompt, extract_answer
from tests.factories import add_employee


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def settings_with_key(key: str = "test-api-key"):
    return get_settings().model_copy(update={"ai_api_key": key})


class TestExtractAnswer:
    """Parsing generateContent payloads."""

    def test_first_candidate_text(self) -> None:
        assert extract_answer(gemini_reply("Hay 3 empleados.")) == "Hay 3 empleados."

    def test_missing_candidates(self) -> None:
        assert extract_answer({}) is None
        assert extract_answer({"candidates": []}) is None
        assert extract_answer({"candidates": [{"content": {"parts": []}}]}) is None

    def test_text_is_not_altered(self) -> None:
        assert extract_answer(gemini_reply("  Hay 3 empleados.\n")) == "  Hay 3 empleados.\n"

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            "candidates",
            {"candidates": "oops"},
            {"candidates": ["oops"]},
            {"candidates": [{"content": "texto"}]},
            {"candidates": [{"content": {"parts": ["texto"]}}]},
            {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        ],
    )
    def test_unexpected_shapes(self, payload) -> None:
        assert extract_answer(payload) is None


class TestBuildPrompt:
    def test_prompt_embeds_question_and_data(self) -> None:
        prompt = build_prompt("¿Cuántos empleados hay?", {"totalEmpleados": 2}, "ACME")

        assert "empresa ACME" in prompt
        assert '"totalEmpleados": 2' in prompt
        assert prompt.index("¿Cuántos empleados hay?") > prompt.index("DATOS ACTUALES")


class TestAIQueryService:
    """Question answering against a stubbed transport."""

    async def test_answer_returned(self, session) -> None:
        await add_employee(session)
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=gemini_reply("  Hay 1 empleado activo.  "))

        service = AIQueryService(
            session, settings=settings_with_key(), transport=httpx.MockTransport(handler)
        )

        result = await service.ask("¿Cuántos empleados activos hay?")

        assert result.success
        assert result.response == "  Hay 1 empleado activo.  "
        assert result.error is None

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path.endswith(":generateContent")
        assert request.url.params["key"] == "test-api-key"
        body = json.loads(request.content)
        assert body["generationConfig"]["temperature"] == 0.3
        prompt = body["contents"][0]["parts"][0]["text"]
        assert "¿Cuántos empleados activos hay?" in prompt
        assert "Ana María Gómez Ruiz" in prompt

    async def test_empty_question(self, session) -> None:
        service = AIQueryService(session, settings=settings_with_key())

        result = await service.ask("   ")

        assert not result.success
        assert result.error == "La pregunta no puede estar vacía."

    async def test_missing_api_key(self, session) -> None:
        service = AIQueryService(session, settings=settings_with_key(""))

        result = await service.ask("¿Cuántos empleados hay?")

        assert not result.success
        assert result.error == "La API Key de Gemini no está configurada."

    async def test_provider_error_status(self, session) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": {}}))
        service = AIQueryService(session, settings=settings_with_key(), transport=transport)

        result = await service.ask("¿Cuántos empleados hay?")

        assert not result.success
        assert result.error == "No se pudo obtener respuesta de Gemini."

    async def test_network_failure(self, session) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        service = AIQueryService(
            session, settings=settings_with_key(), transport=httpx.MockTransport(handler)
        )

        result = await service.ask("¿Cuántos empleados hay?")

        assert not result.success
        assert result.error == "No se pudo obtener respuesta de Gemini."

    async def test_empty_candidates(self, session) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
        service = AIQueryService(session, settings=settings_with_key(), transport=transport)

        result = await service.ask("¿Cuántos empleados hay?")

        assert not result.success

    @pytest.mark.parametrize("reply", [["oops"], {"candidates": ["oops"]}, {"candidates": [{"content": []}]}])
    async def test_malformed_reply_is_a_failure_result(self, session, reply) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=reply))
        service = AIQueryService(session, settings=settings_with_key(), transport=transport)

        result = await service.ask("hola")

        assert not result.success
        assert result.error == "No se pudo obtener respuesta de Gemini."


class TestContext:
    """Data snapshot sent with each question."""

    async def test_totals_and_salary_figures(self, session) -> None:
        await add_employee(session, document="1", email="a@example.com", salary=Decimal("1000000"))
        await add_employee(
            session,
            document="2",
            email="b@example.com",
            salary=Decimal("3000000"),
            status=EmployeeStatus.INACTIVE,
        )
        service = AIQueryService(session, settings=settings_with_key())

        context = await service.build_context()

        assert context["totalEmpleados"] == 2
        assert context["empleadosActivos"] == 1
        assert context["empleadosInactivos"] == 1
        assert context["empleadosVacaciones"] == 0
        assert context["salarioPromedio"] == 2000000.0
        assert context["salarioMaximo"] == 3000000.0
        assert context["salarioMinimo"] == 1000000.0
        assert context["sumaTotalSalarios"] == 4000000.0
        assert len(context["departamentos"]) == 7
        assert len(context["listaEmpleados"]) == 2
        assert context["empleadosPorNivelEducativo"] == [{"nivel": "Profesional", "cantidad": 2}]

    async def test_no_salary_figures_without_employees(self, session) -> None:
        context = await AIQueryService(session, settings=settings_with_key()).build_context()

        assert context["totalEmpleados"] == 0
        assert "salarioPromedio" not in context
