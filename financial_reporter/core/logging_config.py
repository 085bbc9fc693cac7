"""Run-id tagged logging shared by the CLI batch and the HTTP app."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator
from uuid import uuid4

from financial_reporter.core.settings import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(run_id)s] %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUP_COUNT = 5
NO_RUN_ID = "-"

_current_run: ContextVar[str] = ContextVar("financial_run_id", default=NO_RUN_ID)


class RunIdFilter(logging.Filter):
    """Tags every record with the current download run (or HTTP request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _current_run.get()
        return True


def current_run_id() -> str:
    return _current_run.get()


@contextmanager
def run_id_scope(run_id: str | None = None) -> Iterator[str]:
    """Tags records logged inside the block with `run_id`, or a fresh id when none is given."""
    token = _current_run.set(run_id or uuid4().hex[:12])
    try:
        yield _current_run.get()
    finally:
        _current_run.reset(token)


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    # Cron keeps appending to one file; rotate so it never grows unbounded.
    rotating = RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
    return [logging.StreamHandler(), rotating]


def configure_logging(settings: Settings) -> None:
    """Console plus rotating file under LOG_FILE; later calls are no-ops."""
    root_logger = logging.getLogger()
    if getattr(root_logger, "_financial_logging_configured", False):
        return

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in _build_handlers(settings):
        handler.setFormatter(formatter)
        handler.addFilter(RunIdFilter())
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    root_logger._financial_logging_configured = True
