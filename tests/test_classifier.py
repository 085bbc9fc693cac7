"""Tests for reporter output classification."""

import pytest

from financial_reporter.reporter.classifier import ReportOutcomeClassifier
from financial_reporter.reporter.models import (
    AuthFailure,
    NotAvailable,
    OutcomeKind,
    Pending,
    Success,
    UnknownFailure,
)


@pytest.fixture
def classifier() -> ReportOutcomeClassifier:
    return ReportOutcomeClassifier()


def test_zero_exit_is_success_regardless_of_output(classifier: ReportOutcomeClassifier) -> None:
    """Exit code 0 wins even if the text mentions a known error."""
    assert classifier.classify(0, "Error 117 in some log line") == Success()


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ("Error 213: There is no report available to download.", NotAvailable()),
        ("Error 117: Your report is not available yet.", Pending()),
    ],
)
def test_marker_rules(classifier: ReportOutcomeClassifier, output: str, expected: object) -> None:
    assert classifier.classify(1, output) == expected


@pytest.mark.parametrize("marker", ["Error 123", "Error 124"])
def test_auth_markers_keep_raw_output(classifier: ReportOutcomeClassifier, marker: str) -> None:
    output = f"{marker}: The access token is invalid or expired."

    outcome = classifier.classify(1, output)

    assert outcome == AuthFailure(raw_message=output)
    assert outcome.kind is OutcomeKind.AUTH_FAILURE


def test_unmatched_output_is_unknown_failure(classifier: ReportOutcomeClassifier) -> None:
    outcome = classifier.classify(3, "java.net.UnknownHostException: reportingitc-reporter.apple.com")

    assert outcome == UnknownFailure(exit_code=3, raw_message="java.net.UnknownHostException: reportingitc-reporter.apple.com")


def test_not_available_takes_precedence_over_pending(classifier: ReportOutcomeClassifier) -> None:
    assert classifier.classify(1, "Error 117 ... Error 213") == NotAvailable()


def test_pending_takes_precedence_over_auth_failure(classifier: ReportOutcomeClassifier) -> None:
    assert classifier.classify(1, "Error 124\nError 117") == Pending()


@pytest.mark.parametrize("exit_code", [1, 2, 255, -1])
def test_markers_do_not_depend_on_exit_code(classifier: ReportOutcomeClassifier, exit_code: int) -> None:
    assert classifier.classify(exit_code, "Error 213") == NotAvailable()


def test_none_output_is_treated_as_empty(classifier: ReportOutcomeClassifier) -> None:
    assert classifier.classify(1, None) == UnknownFailure(exit_code=1, raw_message="")
