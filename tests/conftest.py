"""Shared fixtures: isolated settings and fakes for the reporter client and mail."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

import pytest

from financial_reporter.core.settings import Settings
from financial_reporter.reporter.classifier import ReportOutcomeClassifier
from financial_reporter.reporter.models import ReporterResponse, ReportRequest
from financial_reporter.reporter.orchestrator import FinancialReportOrchestrator
from financial_reporter.reporter.placement import ArtifactPlacer, ExecutionLock


@dataclass
class ScriptedReply:
    """What the fake reporter does for one vendor."""

    exit_code: int = 0
    output: str = ""
    writes_artifact: bool = True
    timed_out: bool = False
    interrupted: bool = False


class FakeReporterGateway:
    """Stands in for the java client: records requests and drops artifacts into the work dir."""

    def __init__(self, work_dir: Path, replies: dict[str, ScriptedReply] | None = None):
        self.work_dir = work_dir
        self.replies = replies or {}
        self.requests: list[ReportRequest] = []

    def script(self, vendor: str, **reply) -> None:
        self.replies[vendor] = ScriptedReply(**reply)

    def fetch(self, request: ReportRequest) -> ReporterResponse:
        self.requests.append(request)
        reply = self.replies.get(request.vendor, ScriptedReply())
        if reply.interrupted:
            raise KeyboardInterrupt
        if reply.exit_code == 0 and reply.writes_artifact and not reply.timed_out:
            (self.work_dir / request.artifact_name).write_bytes(b"\x1f\x8b fake report")
        return ReporterResponse(exit_code=reply.exit_code, output=reply.output, timed_out=reply.timed_out)


class RecordingNotifier:
    def __init__(self, delivered: bool = True):
        self.delivered = delivered
        self.calls: list[tuple[str, str]] = []

    def notify_auth_failure(self, vendor: str, raw_output: str) -> bool:
        self.calls.append((vendor, raw_output))
        return self.delivered


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway reporter install under tmp_path."""
    work_dir = tmp_path / "bin"
    work_dir.mkdir()
    (work_dir / "Reporter.jar").write_bytes(b"PK")
    (work_dir / "Reporter.properties").write_text("AccessToken=test-token\n", encoding="utf-8")

    return replace(
        Settings.from_env(),
        reporter_java_executable="java",
        reporter_jar_file="Reporter.jar",
        reporter_properties_file="Reporter.properties",
        reporter_command="Finance.getReport",
        reporter_work_dir=work_dir,
        reporter_financial_dir=tmp_path / "reports" / "financial",
        reporter_vendor_config=work_dir / "vendor.conf",
        reporter_vendors_key="VENDORS",
        reporter_timeout_seconds=5,
        reporter_vendor_delay_seconds=1.0,
        reporter_lock_file=tmp_path / "reports" / ".financial.lock",
        admin_email="ops@example.com",
        smtp_host="smtp.example.com",
        smtp_port=2525,
        smtp_sender="reporter@example.com",
        smtp_username="",
        smtp_password="",
        smtp_use_tls=False,
        log_file=tmp_path / "logs" / "financial_reporter.log",
    )


@pytest.fixture
def fake_java(settings: Settings, tmp_path: Path) -> Callable[[str], Settings]:
    """Installs a shell script in place of java; returns settings that launch it."""

    def _install(body: str) -> Settings:
        script = tmp_path / "fake-java"
        script.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        script.chmod(0o755)
        return replace(settings, reporter_java_executable=str(script))

    return _install


@pytest.fixture
def write_vendor_config(settings: Settings) -> Callable[[str], Path]:
    def _write(content: str) -> Path:
        settings.reporter_vendor_config.write_text(content, encoding="utf-8")
        return settings.reporter_vendor_config

    return _write


@pytest.fixture
def fake_gateway(settings: Settings) -> FakeReporterGateway:
    return FakeReporterGateway(settings.reporter_work_dir)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_orchestrator(
    settings: Settings,
    fake_gateway: FakeReporterGateway,
    notifier: RecordingNotifier,
    sleeps: list[float],
) -> Callable[..., FinancialReportOrchestrator]:
    """Factory so a test can swap settings while keeping the shared fakes."""

    def _make(active_settings: Settings | None = None, use_file_lock: bool = False) -> FinancialReportOrchestrator:
        active = active_settings or settings
        return FinancialReportOrchestrator(
            settings=active,
            gateway=fake_gateway,
            classifier=ReportOutcomeClassifier(),
            placer=ArtifactPlacer(active.reporter_work_dir, active.reporter_financial_dir),
            notifier=notifier,
            run_lock=ExecutionLock(active.reporter_lock_file) if use_file_lock else nullcontext(),
            sleep=sleeps.append,
        )

    return _make
