"""Resume (hoja de vida) PDF rendering with reportlab."""

import logging
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import cm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from talento_api.config import Settings, get_settings
from talento_api.exceptions import PdfGenerationError
from talento_api.models.orm.employee import EmployeeORM
from talento_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

PRIMARY = colors.HexColor("#1E3A5F")
MUTED = colors.HexColor("#6B7280")
RULE = colors.HexColor("#D1D5DB")

MARGIN = 2 * cm
LINE_HEIGHT = 14


def resume_filename(document: str, on: date | None = None) -> str:
    """Download filename for an employee's resume."""
    on = on or date.today()
    return f"HojaVida_{document}_{on:%Y%m%d}.pdf"


def format_cop(amount: Decimal) -> str:
    """Format an amount as Colombian pesos, e.g. $ 3.500.000 COP."""
    whole = f"{amount:,.0f}".replace(",", ".")
    return f"$ {whole} COP"


def _wrap(text: str, font: str, size: int, max_width: float) -> list[str]:
    """Greedy word wrap using reportlab's string metrics."""
    words = text.split()
    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}".strip()
        if stringWidth(candidate, font, size) <= max_width or not current:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


class PdfService:
    """Render an employee's resume as a one-document PDF."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def generate_resume(self, employee: EmployeeORM) -> bytes:
        """Render the resume of an employee.

        Args:
            employee: Employee with department and job title loaded

        Returns:
            PDF file content

        Raises:
            PdfGenerationError: If rendering fails
        """
        try:
            return self._render(employee)
        except Exception as e:
            log_error(logger, "Error generating resume PDF", e)
            raise PdfGenerationError() from e

    def _render(self, employee: EmployeeORM) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=LETTER)
        pdf.setTitle(f"Hoja de vida - {employee.full_name}")
        pdf.setAuthor(self.settings.company_name)
        width, height = LETTER

        # Header band
        pdf.setFillColor(PRIMARY)
        pdf.rect(0, height - 3 * cm, width, 3 * cm, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.setFont("Helvetica-Bold", 20)
        pdf.drawString(MARGIN, height - 1.6 * cm, "HOJA DE VIDA")
        pdf.setFont("Helvetica", 11)
        pdf.drawString(MARGIN, height - 2.3 * cm, self.settings.company_name)

        # Initials badge
        initials = f"{employee.first_names[:1]}{employee.last_names[:1]}".upper()
        pdf.circle(width - MARGIN - 0.9 * cm, height - 1.5 * cm, 0.9 * cm, stroke=0, fill=1)
        pdf.setFillColor(PRIMARY)
        pdf.setFont("Helvetica-Bold", 16)
        pdf.drawCentredString(width - MARGIN - 0.9 * cm, height - 1.7 * cm, initials)

        y = height - 4 * cm
        pdf.setFillColor(colors.black)
        pdf.setFont("Helvetica-Bold", 16)
        pdf.drawString(MARGIN, y, employee.full_name)
        y -= LINE_HEIGHT + 2
        pdf.setFont("Helvetica", 11)
        pdf.setFillColor(MUTED)
        job_title = employee.job_title.name if employee.job_title else ""
        department = employee.department.name if employee.department else ""
        pdf.drawString(MARGIN, y, f"{job_title} - {department}".strip(" -"))
        y -= 2 * LINE_HEIGHT

        def section(title: str) -> None:
            nonlocal y
            pdf.setFillColor(PRIMARY)
            pdf.setFont("Helvetica-Bold", 12)
            pdf.drawString(MARGIN, y, title)
            y -= 4
            pdf.setStrokeColor(RULE)
            pdf.line(MARGIN, y, width - MARGIN, y)
            y -= LINE_HEIGHT

        def field(label: str, value: str) -> None:
            nonlocal y
            pdf.setFillColor(MUTED)
            pdf.setFont("Helvetica-Bold", 10)
            pdf.drawString(MARGIN, y, f"{label}:")
            pdf.setFillColor(colors.black)
            pdf.setFont("Helvetica", 10)
            pdf.drawString(MARGIN + 5 * cm, y, value)
            y -= LINE_HEIGHT

        section("DATOS PERSONALES")
        field("Documento", employee.document)
        field("Fecha de nacimiento", f"{employee.birth_date:%d/%m/%Y} ({employee.age} años)")
        field("Dirección", employee.address)
        field("Teléfono", employee.phone)
        field("Email", employee.email)
        y -= LINE_HEIGHT / 2

        section("INFORMACIÓN LABORAL")
        field("Departamento", department)
        field("Cargo", job_title)
        field("Fecha de ingreso", f"{employee.hire_date:%d/%m/%Y}")
        field("Antigüedad", f"{employee.years_of_service} años")
        field("Salario", format_cop(employee.salary))
        field("Estado", employee.status_enum.label)
        y -= LINE_HEIGHT / 2

        section("NIVEL EDUCATIVO")
        field("Nivel", employee.education_enum.label)
        y -= LINE_HEIGHT / 2

        if employee.professional_profile:
            section("PERFIL PROFESIONAL")
            pdf.setFillColor(colors.black)
            pdf.setFont("Helvetica", 10)
            for line in _wrap(employee.professional_profile, "Helvetica", 10, width - 2 * MARGIN):
                pdf.drawString(MARGIN, y, line)
                y -= LINE_HEIGHT

        # Signature line
        signature_y = max(y - 3 * cm, 4 * cm)
        pdf.setStrokeColor(colors.black)
        pdf.line(MARGIN, signature_y, MARGIN + 7 * cm, signature_y)
        pdf.setFont("Helvetica", 9)
        pdf.drawString(MARGIN, signature_y - 12, employee.full_name)
        pdf.drawString(MARGIN, signature_y - 24, f"C.C. {employee.document}")

        # Footer
        pdf.setFillColor(MUTED)
        pdf.setFont("Helvetica-Oblique", 8)
        pdf.drawCentredString(
            width / 2,
            1.5 * cm,
            f"Documento generado el {datetime.now():%d/%m/%Y %H:%M} - {self.settings.company_name}",
        )

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()
