"""Tests for calendar month to fiscal period conversion."""

from datetime import date

import pytest

from financial_reporter.reporter.exceptions import InputValidationError
from financial_reporter.reporter.fiscal import last_calendar_month, parse_year_month, to_fiscal_period
from financial_reporter.reporter.models import CalendarMonth, FiscalPeriod


@pytest.mark.parametrize(
    ("month", "year_offset", "period"),
    [
        (1, 0, 4),
        (2, 0, 5),
        (3, 0, 6),
        (4, 0, 7),
        (5, 0, 8),
        (6, 0, 9),
        (7, 0, 10),
        (8, 0, 11),
        (9, 0, 12),
        (10, 1, 1),
        (11, 1, 2),
        (12, 1, 3),
    ],
)
def test_every_calendar_month_maps_to_expected_period(month: int, year_offset: int, period: int) -> None:
    """Each month lands on a fixed period; Oct-Dec roll into the next fiscal year."""
    result = to_fiscal_period(CalendarMonth(year=2023, month=month))

    assert result == FiscalPeriod(fiscal_year=2023 + year_offset, period=period)


def test_september_is_last_period_of_current_fiscal_year() -> None:
    assert to_fiscal_period(CalendarMonth(2024, 9)) == FiscalPeriod(2024, 12)


def test_october_opens_next_fiscal_year() -> None:
    assert to_fiscal_period(CalendarMonth(2024, 10)) == FiscalPeriod(2025, 1)


@pytest.mark.parametrize("year", [1999, 2000, 2024, 2099])
def test_period_always_within_one_to_twelve(year: int) -> None:
    periods = [to_fiscal_period(CalendarMonth(year, month)).period for month in range(1, 13)]

    assert sorted(periods) == list(range(1, 13))


def test_conversion_is_pure() -> None:
    month = CalendarMonth(2024, 11)

    assert to_fiscal_period(month) == to_fiscal_period(month) == FiscalPeriod(2025, 2)


def test_last_calendar_month_within_year() -> None:
    assert last_calendar_month(date(2024, 12, 1)) == CalendarMonth(2024, 11)


def test_last_calendar_month_rolls_back_in_january() -> None:
    assert last_calendar_month(date(2025, 1, 15)) == CalendarMonth(2024, 12)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-05", CalendarMonth(2024, 5)),
        ("2024-10", CalendarMonth(2024, 10)),
        (" 2023-01 ", CalendarMonth(2023, 1)),
    ],
)
def test_parse_year_month_accepts_valid_input(raw: str, expected: CalendarMonth) -> None:
    assert parse_year_month(raw) == expected


@pytest.mark.parametrize("raw", ["2024-13", "2024-00", "2024-5", "24-05", "2024/05", "abcd-ef", "", "2024-05-01"])
def test_parse_year_month_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(InputValidationError):
        parse_year_month(raw)


def test_input_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        CalendarMonth(2024, 13)
