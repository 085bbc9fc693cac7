"""Calendar month to backend fiscal period conversion."""
from __future__ import annotations

import re
from datetime import date

from financial_reporter.reporter.exceptions import InputValidationError
from financial_reporter.reporter.models import CalendarMonth, FiscalPeriod


# Fiscal year starts in October: Oct-Dec are periods 1-3 of the next fiscal year.
FISCAL_YEAR_START_MONTH = 10

_YEAR_MONTH_RE = re.compile(r"[0-9]{4}-[0-9]{2}")


def to_fiscal_period(month: CalendarMonth) -> FiscalPeriod:
    """Maps a calendar month to (fiscal_year, period)."""
    if month.month >= FISCAL_YEAR_START_MONTH:
        return FiscalPeriod(fiscal_year=month.year + 1, period=month.month - 9)
    return FiscalPeriod(fiscal_year=month.year, period=month.month + 3)


def last_calendar_month(today: date | None = None) -> CalendarMonth:
    """Returns the month before `today` (scheduled mode target)."""
    today = today or date.today()
    if today.month == 1:
        return CalendarMonth(year=today.year - 1, month=12)
    return CalendarMonth(year=today.year, month=today.month - 1)


def parse_year_month(raw: str) -> CalendarMonth:
    """Parses manual-mode input in YYYY-MM format."""
    value = (raw or "").strip()
    if not _YEAR_MONTH_RE.fullmatch(value):
        raise InputValidationError(f"Formato de data invalido: '{raw}'. Use YYYY-MM (ex: 2024-05).")

    year_part, month_part = value.split("-")
    return CalendarMonth(year=int(year_part), month=int(month_part))
