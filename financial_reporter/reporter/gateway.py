"""Invocation boundary around the external Reporter client."""
from __future__ import annotations

import logging
import subprocess

from financial_reporter.core.settings import Settings
from financial_reporter.reporter.models import ReporterResponse, ReportRequest


logger = logging.getLogger(__name__)

# Exit code recorded when the client never produced one (timeout or launch failure).
NO_EXIT_CODE = -1


class ReporterClientGateway:
    """Runs `java -jar Reporter.jar p=<properties> <command> <params>` for one request."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def build_command(self, request: ReportRequest) -> list[str]:
        return [
            self._settings.reporter_java_executable,
            "-jar",
            self._settings.reporter_jar_file,
            f"p={self._settings.reporter_properties_file}",
            self._settings.reporter_command,
            request.parameters,
        ]

    def fetch(self, request: ReportRequest) -> ReporterResponse:
        """Blocks until the client exits or the configured timeout expires."""
        command = self.build_command(request)
        timeout = self._settings.reporter_timeout_seconds
        logger.debug("Executando reporter: %s (cwd=%s)", " ".join(command), self._settings.reporter_work_dir)

        try:
            completed = subprocess.run(
                command,
                cwd=str(self._settings.reporter_work_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            partial = self._as_text(exc.output)
            logger.error("Reporter excedeu o timeout de %ss | vendor=%s", timeout, request.vendor)
            return ReporterResponse(
                exit_code=NO_EXIT_CODE,
                output=f"{partial}\nReporter interrompido apos {timeout}s sem resposta.".lstrip(),
                timed_out=True,
            )
        except OSError as exc:
            logger.error("Falha ao iniciar o reporter: %s", exc)
            return ReporterResponse(exit_code=NO_EXIT_CODE, output=f"Falha ao iniciar o reporter: {exc}")

        return ReporterResponse(exit_code=completed.returncode, output=completed.stdout or "")

    @staticmethod
    def _as_text(raw: str | bytes | None) -> str:
        if raw is None:
            return ""
        if isinstance(raw, bytes):
            return raw.decode("utf-8", errors="replace")
        return raw
