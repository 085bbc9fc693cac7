"""FastAPI entrypoint for the financial report downloader."""
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

from financial_reporter.api.routes.financial_reports import router as financial_router
from financial_reporter.core.logging_config import configure_logging, run_id_scope
from financial_reporter.core.settings import Settings, get_settings


RUN_ID_HEADER = "X-Run-ID"

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    application = FastAPI(title="Financial Reporter API", version="1.0.0")
    application.include_router(financial_router)

    @application.middleware("http")
    async def tag_run_id(request: Request, call_next):
        # Reuse the caller's id when it sends one.
        with run_id_scope(request.headers.get(RUN_ID_HEADER)) as run_id:
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info("%s %s -> %s (%.0f ms)", request.method, request.url.path, response.status_code, elapsed_ms)

        response.headers[RUN_ID_HEADER] = run_id
        return response

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        """Simple health endpoint."""
        return {"status": "ok"}

    return application


app = create_app()
