"""Spreadsheet cell parsing tests."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from talento_api.models.domain.employee import EducationLevel, EmployeeStatus
from talento_api.utils.file_parser import (
    cell_text,
    normalize_label,
    parse_date,
    parse_decimal,
    parse_education_level,
    parse_status,
)


class TestCellText:
    def test_float_document_loses_decimal_part(self) -> None:
        assert cell_text(1020304050.0) == "1020304050"

    def test_none_is_empty(self) -> None:
        assert cell_text(None) == ""

    def test_text_is_trimmed(self) -> None:
        assert cell_text("  Ana  ") == "Ana"


class TestNormalizeLabel:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Especialización", "especializacion"),
            ("  EN   Vacaciones ", "en vacaciones"),
            ("Tecnología", "tecnologia"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_label(raw) == expected


class TestParseDate:
    """Dates arrive as native cells, serial numbers or text."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (datetime(2021, 1, 15, 8, 30), date(2021, 1, 15)),
            (date(2021, 1, 15), date(2021, 1, 15)),
            (44211, date(2021, 1, 15)),
            ("2021-01-15", date(2021, 1, 15)),
            ("15/01/2021", date(2021, 1, 15)),
            ("15-01-2021", date(2021, 1, 15)),
        ],
    )
    def test_accepted_forms(self, value, expected: date) -> None:
        assert parse_date(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "31/02/2021", "ayer", 0, -3, 99999999, float("nan"), float("inf")]
    )
    def test_rejected_values(self, value) -> None:
        assert parse_date(value) is None


class TestParseDecimal:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3500000, Decimal("3500000")),
            (1234.5, Decimal("1234.5")),
            ("$ 3.500.000", Decimal("3500000")),
            ("3500000,50", Decimal("3500000.50")),
            ("3,500,000.75", Decimal("3500000.75")),
            ("2500000 COP", Decimal("2500000")),
            ("1.500,50", Decimal("1500.50")),
            ("1,500,000", Decimal("1500000")),
            ("$ 4.250.000,00", Decimal("4250000.00")),
            ("2,5", Decimal("2.5")),
            ("1500.75", Decimal("1500.75")),
        ],
    )
    def test_amounts(self, value, expected: Decimal) -> None:
        assert parse_decimal(value) == expected

    @pytest.mark.parametrize("value", [None, "", "no aplica", True, "NaN", "1,2,3", float("nan")])
    def test_unreadable(self, value) -> None:
        assert parse_decimal(value) is None


class TestParseEnums:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Activo", EmployeeStatus.ACTIVE),
            ("INACTIVO", EmployeeStatus.INACTIVE),
            ("En Vacaciones", EmployeeStatus.ON_VACATION),
            ("vacaciones", EmployeeStatus.ON_VACATION),
            ("desconocido", EmployeeStatus.ACTIVE),
            (None, EmployeeStatus.ACTIVE),
        ],
    )
    def test_status(self, value, expected: EmployeeStatus) -> None:
        assert parse_status(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Técnico", EducationLevel.TECHNICIAN),
            ("Tecnólogo", EducationLevel.TECHNOLOGIST),
            ("PROFESIONAL", EducationLevel.PROFESSIONAL),
            ("Especialización", EducationLevel.SPECIALIZATION),
            ("Maestría", EducationLevel.MASTERS),
            ("Doctorado", EducationLevel.TECHNICIAN),
        ],
    )
    def test_education_level(self, value, expected: EducationLevel) -> None:
        assert parse_education_level(value) == expected
