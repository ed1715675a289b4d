"""Resume PDF, email and logging helper tests."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from talento_api.config import get_settings
from talento_api.exceptions import PdfGenerationError
from talento_api.middleware.error_handler import is_safe_error_message, validation_messages
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.services.email_service import EmailService
from talento_api.services.pdf_service import PdfService, format_cop, resume_filename
from talento_api.utils.secure_logging import sanitize_exception_message
from talento_api.utils.security_events import SecurityEventType, log_security_event
from tests.factories import add_employee


class TestPdfService:
    """Resume rendering."""

    async def test_resume_is_a_pdf(self, session) -> None:
        employee = await add_employee(session, professional_profile="Perfil " * 80)
        employee = await UnitOfWork(session).employees.get_with_details(employee.id)

        content = PdfService().generate_resume(employee)

        assert content.startswith(b"%PDF")
        assert len(content) > 1000

    def test_render_failure_is_wrapped(self) -> None:
        with pytest.raises(PdfGenerationError):
            PdfService().generate_resume(None)

    def test_filename(self) -> None:
        assert resume_filename("123", on=date(2024, 3, 5)) == "HojaVida_123_20240305.pdf"

    def test_cop_format(self) -> None:
        assert format_cop(Decimal("3500000")) == "$ 3.500.000 COP"


class TestEmailService:
    """SMTP delivery without a real server."""

    async def test_not_configured_returns_false(self) -> None:
        service = EmailService(get_settings().model_copy(update={"smtp_username": ""}))
        assert not service.is_configured
        assert await service.send_welcome_email("ana@example.com", "Ana Gómez") is False

    async def test_welcome_email_rendered_and_sent(self, monkeypatch) -> None:
        settings = get_settings().model_copy(
            update={
                "smtp_username": "rrhh@talentoplus.com",
                "smtp_password": "app-password",
                "company_name": "TalentoPlus S.A.S.",
            }
        )
        service = EmailService(settings)
        sent = []
        monkeypatch.setattr(service, "_send_email_sync", lambda to, msg: sent.append((to, msg)))

        assert await service.send_welcome_email("ana@example.com", "Ana Gómez") is True

        to_email, msg = sent[0]
        assert to_email == "ana@example.com"
        assert msg["Subject"] == "¡Bienvenido a TalentoPlus S.A.S.!"
        html = msg.get_payload()[1].get_payload(decode=True).decode("utf-8")
        assert "Ana Gómez" in html

    async def test_smtp_failure_returns_false(self, monkeypatch) -> None:
        settings = get_settings().model_copy(
            update={"smtp_username": "rrhh@talentoplus.com", "smtp_password": "app-password"}
        )
        service = EmailService(settings)

        def fail(to_email, msg):
            raise OSError("connection refused")

        monkeypatch.setattr(service, "_send_email_sync", fail)

        assert await service.send_email("ana@example.com", "Hola", "<p>Hola</p>") is False


class TestErrorMessages:
    """Messages allowed through the API error handler."""

    @pytest.mark.parametrize(
        "message",
        ["Empleado no encontrado", "Ya existe un empleado con este email", "Token inválido o expirado"],
    )
    def test_safe_messages(self, message: str) -> None:
        assert is_safe_error_message(message)

    def test_internal_details_hidden(self) -> None:
        assert not is_safe_error_message("relation \"employees\" does not exist")

    def test_validation_messages(self) -> None:
        errors = [
            {"loc": ("body", "email"), "msg": "value is not a valid email address"},
            {"loc": ("body",), "msg": "Value error, Las contraseñas no coinciden"},
        ]
        assert validation_messages(errors) == [
            "email: value is not a valid email address",
            "body: Las contraseñas no coinciden",
        ]


class TestSanitizeException:
    def test_secrets_removed(self) -> None:
        error = RuntimeError(
            "failed https://generativelanguage.googleapis.com/v1/models?key=abc for ana@example.com"
        )
        message = sanitize_exception_message(error)

        assert "googleapis" not in message
        assert "ana@example.com" not in message

    def test_credentials_outside_urls_redacted(self) -> None:
        message = sanitize_exception_message(ValueError("auth failed: password=hunter2 user=ana"))
        assert message == "auth failed: password=[REDACTED] user=ana"


class TestSecurityEvents:
    def test_failed_attempt_is_a_warning(self, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="security"):
            log_security_event(
                SecurityEventType.EMPLOYEE_LOGIN_FAILED, user_email="ana@example.com", success=False
            )

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "api:employee_login_failed (failed)"
        assert record.security_event["actor"]["email"] == "ana@example.com"

    def test_console_events(self) -> None:
        assert SecurityEventType.EMPLOYEE_DELETED.channel == "console"
        assert SecurityEventType.BULK_IMPORT.channel == "console"
