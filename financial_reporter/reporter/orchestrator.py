"""Coordinates the per-vendor financial report download."""
from __future__ import annotations

import logging
import time
from contextlib import AbstractContextManager
from typing import Callable, Sequence

from financial_reporter.core.settings import Settings
from financial_reporter.reporter.classifier import ReportOutcomeClassifier
from financial_reporter.reporter.exceptions import (
    ArtifactPlacementError,
    ConfigurationMissingError,
    InputValidationError,
)
from financial_reporter.reporter.fiscal import to_fiscal_period
from financial_reporter.reporter.gateway import ReporterClientGateway
from financial_reporter.reporter.models import (
    AuthFailure,
    CalendarMonth,
    NotAvailable,
    Pending,
    ReportOutcome,
    ReportRequest,
    RunResult,
    Success,
    UnknownFailure,
    VendorOutcome,
    aggregate_exit_code,
)
from financial_reporter.reporter.notifier import EmailNotifier
from financial_reporter.reporter.placement import ArtifactPlacer


logger = logging.getLogger(__name__)


class FinancialReportOrchestrator:
    """Requests last month's (or a given month's) Financial report for every vendor."""

    def __init__(
        self,
        settings: Settings,
        gateway: ReporterClientGateway,
        classifier: ReportOutcomeClassifier,
        placer: ArtifactPlacer,
        notifier: EmailNotifier,
        run_lock: AbstractContextManager,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._settings = settings
        self._gateway = gateway
        self._classifier = classifier
        self._placer = placer
        self._notifier = notifier
        self._run_lock = run_lock
        self._sleep = sleep

    def run(self, target_month: CalendarMonth, vendors: Sequence[str]) -> RunResult:
        if not vendors:
            raise InputValidationError("Nenhum vendor configurado para download.")

        missing = self._settings.missing_reporter_files()
        if missing:
            raise ConfigurationMissingError(f"Arquivos do reporter ausentes: {', '.join(missing)}")

        fiscal_period = to_fiscal_period(target_month)
        logger.info(
            "Inicio do download financeiro | mes=%s | periodo_fiscal=%s | vendors=%d",
            target_month,
            fiscal_period,
            len(vendors),
        )

        results: list[VendorOutcome] = []
        with self._run_lock:
            for index, vendor in enumerate(vendors):
                if index:
                    self._sleep(self._settings.reporter_vendor_delay_seconds)
                request = ReportRequest.for_vendor(vendor, fiscal_period)
                results.append(VendorOutcome(vendor=vendor, outcome=self._process(request)))

        exit_code = aggregate_exit_code(item.outcome for item in results)
        logger.info(
            "Download financeiro concluido | periodo_fiscal=%s | vendors=%d | exit_code=%d",
            fiscal_period,
            len(results),
            exit_code,
        )
        return RunResult(
            target_month=target_month,
            fiscal_period=fiscal_period,
            outcomes=tuple(results),
            exit_code=exit_code,
        )

    def _process(self, request: ReportRequest) -> ReportOutcome:
        logger.info(
            "Processando vendor %s (periodo fiscal %s-%s)",
            request.vendor,
            request.fiscal_year,
            request.period,
        )
        response = self._gateway.fetch(request)

        if response.timed_out:
            outcome: ReportOutcome = UnknownFailure(exit_code=response.exit_code, raw_message=response.output)
        else:
            outcome = self._classifier.classify(response.exit_code, response.output)

        if isinstance(outcome, Success):
            return self._place_artifact(request, response.exit_code)
        if isinstance(outcome, NotAvailable):
            logger.info("[sem relatorio] %s - relatorio inexistente para o periodo (Error 213).", request.vendor)
        elif isinstance(outcome, Pending):
            logger.warning(
                "[pendente] %s - relatorio ainda nao gerado (Error 117). Executar novamente mais tarde.",
                request.vendor,
            )
        elif isinstance(outcome, AuthFailure):
            logger.error("[autenticacao] %s - token expirado ou invalido.", request.vendor)
            self._notifier.notify_auth_failure(request.vendor, outcome.raw_message)
        else:
            logger.error(
                "[erro] %s - falha desconhecida (exit_code=%s). Saida do reporter:\n%s",
                request.vendor,
                outcome.exit_code,
                outcome.raw_message,
            )
        return outcome

    def _place_artifact(self, request: ReportRequest, exit_code: int) -> ReportOutcome:
        try:
            placed = self._placer.place(request.artifact_name)
        except ArtifactPlacementError as exc:
            logger.error("[erro] %s - reporter retornou sucesso, mas: %s", request.vendor, exc)
            return UnknownFailure(exit_code=exit_code, raw_message=str(exc))

        logger.info("[sucesso] %s - relatorio salvo em %s", request.vendor, placed)
        return Success(artifact_path=placed)
