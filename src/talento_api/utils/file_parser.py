"""Cell value parsing for spreadsheet imports."""

import re
import unicodedata
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

from talento_api.models.domain.employee import EducationLevel, EmployeeStatus

# Excel stores dates as days since 1899-12-30 (1900 date system)
EXCEL_EPOCH = date(1899, 12, 30)

# Digit groups such as 1,500,000 or 3.500.000
THOUSANDS_GROUPS = {
    ",": re.compile(r"-?\d{1,3}(,\d{3})+"),
    ".": re.compile(r"-?\d{1,3}(\.\d{3})+"),
}

DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
)

STATUS_ALIASES: dict[str, EmployeeStatus] = {
    "activo": EmployeeStatus.ACTIVE,
    "active": EmployeeStatus.ACTIVE,
    "inactivo": EmployeeStatus.INACTIVE,
    "inactive": EmployeeStatus.INACTIVE,
    "vacaciones": EmployeeStatus.ON_VACATION,
    "en vacaciones": EmployeeStatus.ON_VACATION,
    "on vacation": EmployeeStatus.ON_VACATION,
    "on_vacation": EmployeeStatus.ON_VACATION,
}

EDUCATION_ALIASES: dict[str, EducationLevel] = {
    "tecnico": EducationLevel.TECHNICIAN,
    "technician": EducationLevel.TECHNICIAN,
    "tecnologo": EducationLevel.TECHNOLOGIST,
    "technologist": EducationLevel.TECHNOLOGIST,
    "profesional": EducationLevel.PROFESSIONAL,
    "professional": EducationLevel.PROFESSIONAL,
    "especializacion": EducationLevel.SPECIALIZATION,
    "especialista": EducationLevel.SPECIALIZATION,
    "specialization": EducationLevel.SPECIALIZATION,
    "maestria": EducationLevel.MASTERS,
    "magister": EducationLevel.MASTERS,
    "masters": EducationLevel.MASTERS,
}


def cell_text(value: Any) -> str:
    """Render a cell value as trimmed text ("" for empty cells)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Numeric document numbers come back as floats
        return str(int(value))
    return str(value).strip()


def normalize_label(value: str) -> str:
    """Lower-case a label and strip accents and repeated whitespace.

    Args:
        value: Raw label such as "Especialización" or "  EN  Vacaciones "

    Returns:
        Normalized label ("especializacion", "en vacaciones")
    """
    decomposed = unicodedata.normalize("NFKD", value)
    without_accents = "".join(c for c in decomposed if not unicodedata.combining(c))
    return re.sub(r"\s+", " ", without_accents).strip().lower()


def parse_date(value: Any) -> date | None:
    """Parse a cell into a date.

    Accepts native date/datetime cells, Excel serial numbers and text in
    ISO or day-first formats.

    Args:
        value: Cell value

    Returns:
        Parsed date, or None if the value is empty or not a date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            days = int(value)
            return EXCEL_EPOCH + timedelta(days=days) if days > 0 else None
        except (OverflowError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value: Any) -> Decimal | None:
    """Parse a cell into a Decimal amount.

    Currency symbols and spaces are ignored. When both separators appear,
    the right-most one is the decimal separator ("1.500,50", "3,500,000.75").
    Commas between groups of three digits ("1,500,000") and repeated dots
    ("3.500.000") are thousands separators; otherwise a lone comma or dot
    marks the decimals.

    Returns:
        Parsed amount, or None if the value cannot be read as a number
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        amount = Decimal(str(value))
        return amount if amount.is_finite() else None

    text = re.sub(r"[\s$]|COP", "", str(value), flags=re.IGNORECASE)
    if not text:
        return None
    if "," in text and "." in text:
        decimal_sep = "," if text.rfind(",") > text.rfind(".") else "."
        thousands_sep = "." if decimal_sep == "," else ","
        text = text.replace(thousands_sep, "").replace(decimal_sep, ".")
    else:
        sep = "," if "," in text else "."
        if THOUSANDS_GROUPS[sep].fullmatch(text) and (sep == "," or text.count(".") > 1):
            text = text.replace(sep, "")
        elif text.count(sep) > 1:
            return None
        else:
            text = text.replace(",", ".")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def parse_status(value: Any) -> EmployeeStatus:
    """Coerce a cell into an employee status, defaulting to active."""
    return STATUS_ALIASES.get(normalize_label(cell_text(value)), EmployeeStatus.ACTIVE)


def parse_education_level(value: Any) -> EducationLevel:
    """Coerce a cell into an education level, defaulting to technician."""
    return EDUCATION_ALIASES.get(normalize_label(cell_text(value)), EducationLevel.TECHNICIAN)
