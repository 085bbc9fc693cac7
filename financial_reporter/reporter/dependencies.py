"""Dependency graph for the financial report flow."""
from __future__ import annotations

from fastapi import Depends

from financial_reporter.core.settings import Settings, get_settings
from financial_reporter.reporter.classifier import ReportOutcomeClassifier
from financial_reporter.reporter.gateway import ReporterClientGateway
from financial_reporter.reporter.notifier import EmailNotifier
from financial_reporter.reporter.orchestrator import FinancialReportOrchestrator
from financial_reporter.reporter.placement import ArtifactPlacer, ExecutionLock
from financial_reporter.reporter.vendor_store import VendorConfigStore


def get_orchestrator(settings: Settings = Depends(get_settings)) -> FinancialReportOrchestrator:
    """Builds orchestrator with concrete infrastructure services."""
    return FinancialReportOrchestrator(
        settings=settings,
        gateway=ReporterClientGateway(settings=settings),
        classifier=ReportOutcomeClassifier(),
        placer=ArtifactPlacer(
            source_dir=settings.reporter_work_dir,
            destination_dir=settings.reporter_financial_dir,
        ),
        notifier=EmailNotifier(settings=settings),
        run_lock=ExecutionLock(settings.reporter_lock_file),
    )


def get_vendor_store(settings: Settings = Depends(get_settings)) -> VendorConfigStore:
    """Vendor store read once per run."""
    return VendorConfigStore(settings.reporter_vendor_config, key=settings.reporter_vendors_key)
