"""Maps raw reporter output to a report outcome."""
from __future__ import annotations

from financial_reporter.reporter.models import (
    AuthFailure,
    NotAvailable,
    Pending,
    ReportOutcome,
    Success,
    UnknownFailure,
)


NOT_AVAILABLE_MARKERS = ("Error 213",)
PENDING_MARKERS = ("Error 117",)
AUTH_FAILURE_MARKERS = ("Error 123", "Error 124")


class ReportOutcomeClassifier:
    """Classifies one reporter invocation.

    The client only reports failure reasons as free text, so rules are plain
    substring checks evaluated in order. The exit code matters only for the
    success rule; every marker rule applies whatever the exit code was.
    """

    def classify(self, exit_code: int, output: str) -> ReportOutcome:
        text = output or ""

        if exit_code == 0:
            return Success()
        if self._contains_any(text, NOT_AVAILABLE_MARKERS):
            return NotAvailable()
        if self._contains_any(text, PENDING_MARKERS):
            return Pending()
        if self._contains_any(text, AUTH_FAILURE_MARKERS):
            return AuthFailure(raw_message=text)
        return UnknownFailure(exit_code=exit_code, raw_message=text)

    @staticmethod
    def _contains_any(text: str, markers: tuple[str, ...]) -> bool:
        return any(marker in text for marker in markers)
