"""HTTP route to trigger a financial report download run."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import AliasChoices, BaseModel, Field, field_validator

from financial_reporter.reporter.dependencies import get_orchestrator, get_vendor_store
from financial_reporter.reporter.exceptions import ReporterError
from financial_reporter.reporter.fiscal import last_calendar_month, parse_year_month
from financial_reporter.reporter.models import (
    AuthFailure,
    CalendarMonth,
    RunResult,
    Success,
    UnknownFailure,
    VendorOutcome,
)
from financial_reporter.reporter.orchestrator import FinancialReportOrchestrator
from financial_reporter.reporter.vendor_store import VendorConfigStore


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["financial-reports"])


class FinancialRunRequest(BaseModel):
    """Request payload; omit month to fetch last calendar month."""

    month: str | None = Field(
        default=None,
        description="Mes alvo no formato YYYY-MM",
        validation_alias=AliasChoices("month", "targetMonth"),
    )

    @field_validator("month")
    @classmethod
    def validate_month(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return str(parse_year_month(value))

    def target_month(self) -> CalendarMonth:
        if self.month is None:
            return last_calendar_month()
        return parse_year_month(self.month)


class VendorOutcomeResponse(BaseModel):
    vendor: str
    outcome: str
    artifact_path: str | None = None
    exit_code: int | None = None
    message: str | None = None


class FinancialRunResponse(BaseModel):
    """Result payload for a download run."""

    status: str
    target_month: str
    fiscal_year: int
    fiscal_period: int
    exit_code: int
    outcomes: list[VendorOutcomeResponse]


def _to_vendor_response(item: VendorOutcome) -> VendorOutcomeResponse:
    outcome = item.outcome
    response = VendorOutcomeResponse(vendor=item.vendor, outcome=outcome.kind.value)
    if isinstance(outcome, Success) and outcome.artifact_path is not None:
        response.artifact_path = str(outcome.artifact_path)
    elif isinstance(outcome, AuthFailure):
        response.message = outcome.raw_message
    elif isinstance(outcome, UnknownFailure):
        response.exit_code = outcome.exit_code
        response.message = outcome.raw_message
    return response


def _to_response(result: RunResult) -> FinancialRunResponse:
    return FinancialRunResponse(
        status="success" if result.exit_code == 0 else "attention_required",
        target_month=str(result.target_month),
        fiscal_year=result.fiscal_period.fiscal_year,
        fiscal_period=result.fiscal_period.period,
        exit_code=result.exit_code,
        outcomes=[_to_vendor_response(item) for item in result.outcomes],
    )


@router.post("/financial/run", response_model=FinancialRunResponse)
def run_financial_download(
    payload: FinancialRunRequest,
    orchestrator: FinancialReportOrchestrator = Depends(get_orchestrator),
    vendor_store: VendorConfigStore = Depends(get_vendor_store),
) -> FinancialRunResponse:
    """Runs one download batch over all configured vendors."""
    target_month = payload.target_month()
    logger.info("Requisicao de download financeiro recebida | mes=%s", target_month)

    try:
        vendors = vendor_store.load()
        result = orchestrator.run(target_month, vendors)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ReporterError as exc:
        logger.exception("Falha no download financeiro: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _to_response(result)
