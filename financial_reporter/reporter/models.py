"""Domain models for the financial report flow."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import reduce
from pathlib import Path
from typing import ClassVar, Iterable, Union

from financial_reporter.reporter.exceptions import InputValidationError


REGION = "ZZ"
REPORT_TYPE = "Financial"

EXIT_OK = 0
EXIT_ATTENTION = 1


@dataclass(frozen=True)
class CalendarMonth:
    """Gregorian year/month requested by the caller."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise InputValidationError(f"Mes invalido: {self.month}. Use um valor entre 01 e 12.")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class FiscalPeriod:
    """Fiscal year/period as numbered by the reporting backend."""

    fiscal_year: int
    period: int

    def __post_init__(self) -> None:
        if not 1 <= self.period <= 12:
            raise ValueError(f"Periodo fiscal fora do intervalo 1-12: {self.period}")

    def __str__(self) -> str:
        return f"{self.fiscal_year}-{self.period}"


@dataclass(frozen=True)
class ReportRequest:
    """One Finance.getReport call for a single vendor."""

    vendor: str
    fiscal_year: int
    period: int
    region: str = REGION
    report_type: str = REPORT_TYPE

    @classmethod
    def for_vendor(cls, vendor: str, fiscal_period: FiscalPeriod) -> "ReportRequest":
        return cls(vendor=vendor, fiscal_year=fiscal_period.fiscal_year, period=fiscal_period.period)

    @property
    def parameters(self) -> str:
        """Comma-joined parameter string in the order the client expects."""
        return ",".join(
            [self.vendor, self.region, self.report_type, str(self.fiscal_year), str(self.period)]
        )

    @property
    def artifact_name(self) -> str:
        """File name the client writes into its working directory."""
        return f"{self.vendor}_{self.region}_{self.report_type}_{self.fiscal_year}_{self.period}.gz"


@dataclass(frozen=True)
class ReporterResponse:
    """Combined output and exit status captured from the reporter client."""

    exit_code: int
    output: str
    timed_out: bool = False


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NOT_AVAILABLE = "not_available"
    PENDING = "pending"
    AUTH_FAILURE = "auth_failure"
    UNKNOWN_FAILURE = "unknown_failure"


@dataclass(frozen=True)
class Success:
    artifact_path: Path | None = None

    kind: ClassVar[OutcomeKind] = OutcomeKind.SUCCESS
    benign: ClassVar[bool] = True


@dataclass(frozen=True)
class NotAvailable:
    kind: ClassVar[OutcomeKind] = OutcomeKind.NOT_AVAILABLE
    benign: ClassVar[bool] = True


@dataclass(frozen=True)
class Pending:
    kind: ClassVar[OutcomeKind] = OutcomeKind.PENDING
    benign: ClassVar[bool] = False


@dataclass(frozen=True)
class AuthFailure:
    raw_message: str

    kind: ClassVar[OutcomeKind] = OutcomeKind.AUTH_FAILURE
    benign: ClassVar[bool] = False


@dataclass(frozen=True)
class UnknownFailure:
    exit_code: int
    raw_message: str

    kind: ClassVar[OutcomeKind] = OutcomeKind.UNKNOWN_FAILURE
    benign: ClassVar[bool] = False


ReportOutcome = Union[Success, NotAvailable, Pending, AuthFailure, UnknownFailure]


def outcome_exit_code(outcome: ReportOutcome) -> int:
    return EXIT_OK if outcome.benign else EXIT_ATTENTION


def combine_exit_codes(left: int, right: int) -> int:
    """Any non-zero side poisons the combined status."""
    return max(left, right)


def aggregate_exit_code(outcomes: Iterable[ReportOutcome]) -> int:
    """Folds per-vendor outcomes into the process exit status."""
    return reduce(combine_exit_codes, (outcome_exit_code(item) for item in outcomes), EXIT_OK)


@dataclass(frozen=True)
class VendorOutcome:
    vendor: str
    outcome: ReportOutcome


@dataclass(frozen=True)
class RunResult:
    """Output of one orchestrator run."""

    target_month: CalendarMonth
    fiscal_period: FiscalPeriod
    outcomes: tuple[VendorOutcome, ...]
    exit_code: int
