"""Custom errors for financial report retrieval."""


class ReporterError(Exception):
    """Base error for report retrieval failures."""


class InputValidationError(ReporterError, ValueError):
    """Raised when the target month or vendor list is unusable."""


class ConfigurationMissingError(ReporterError):
    """Raised when vendor store or reporter files cannot be read."""


class ArtifactPlacementError(ReporterError):
    """Raised when a downloaded report cannot be moved into place."""
