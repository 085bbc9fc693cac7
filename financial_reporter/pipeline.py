"""
Command-line entrypoint for the Financial report download.

Without arguments it fetches last calendar month (cron mode). With --month or
--prompt it fetches the given month (manual mode). The exit code is 0 when
every vendor either downloaded its report or had none for the period, and 1
when an operator needs to look at the log or re-run later.
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
from dataclasses import replace
from pathlib import Path

from financial_reporter.core.logging_config import configure_logging, run_id_scope
from financial_reporter.core.settings import Settings, get_settings
from financial_reporter.reporter.dependencies import get_orchestrator, get_vendor_store
from financial_reporter.reporter.exceptions import ConfigurationMissingError, InputValidationError
from financial_reporter.reporter.fiscal import last_calendar_month, parse_year_month
from financial_reporter.reporter.models import EXIT_ATTENTION, CalendarMonth

logger = logging.getLogger(__name__)


def resolve_target_month(month: str | None = None, prompt: bool = False) -> CalendarMonth:
    """Manual input wins over the scheduled default; validated before anything else runs."""
    if prompt and not month:
        month = input(">> Mes a baixar (ex: 2024-05): ")
    if month is not None:
        return parse_year_month(month)
    return last_calendar_month()


def run_download(settings: Settings, month: str | None = None, prompt: bool = False) -> int:
    """Runs one batch and returns the aggregate exit code."""
    target_month = resolve_target_month(month, prompt)
    vendors = get_vendor_store(settings).load()
    result = get_orchestrator(settings).run(target_month, vendors)

    for item in result.outcomes:
        logger.info("Resumo | vendor=%s | resultado=%s", item.vendor, item.outcome.kind.value)
    return result.exit_code


def _raise_interrupt(signum, frame) -> None:
    raise KeyboardInterrupt(f"signal {signum}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Download do relatorio Financial por vendor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Exemplos de uso:
      financial-reporter                    # mes anterior (crontab)
      financial-reporter --month 2024-05    # mes especifico
      financial-reporter --prompt           # pergunta o mes no terminal
    """,
    )
    parser.add_argument("--month", "-m", type=str, help="Mes alvo no formato YYYY-MM (ex: 2024-05)")
    parser.add_argument("--prompt", "-p", action="store_true", help="Solicita o mes alvo interativamente")
    parser.add_argument("--vendor-config", type=Path, help="Arquivo de vendors (sobrescreve REPORTER_VENDOR_CONFIG)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Ponto de entrada principal."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.vendor_config:
        settings = replace(settings, reporter_vendor_config=args.vendor_config.expanduser().resolve())
    configure_logging(settings)

    with run_id_scope():
        previous_handler = signal.signal(signal.SIGTERM, _raise_interrupt)
        try:
            return run_download(settings, month=args.month, prompt=args.prompt)
        except InputValidationError as exc:
            logger.error("Entrada invalida: %s", exc)
            return EXIT_ATTENTION
        except ConfigurationMissingError as exc:
            logger.error("Configuracao ausente: %s", exc)
            return EXIT_ATTENTION
        except KeyboardInterrupt:
            logger.warning("Execucao cancelada")
            return EXIT_ATTENTION
        finally:
            signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    sys.exit(main())
