"""Reads the configured vendor list from the key-value vendor file."""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import dotenv_values

from financial_reporter.reporter.exceptions import ConfigurationMissingError


logger = logging.getLogger(__name__)

DEFAULT_VENDORS_KEY = "VENDORS"


class VendorConfigStore:
    """Vendor file with a single space-delimited list, e.g. `VENDORS="80012345 80067890"`."""

    def __init__(self, path: Path, key: str = DEFAULT_VENDORS_KEY):
        self._path = Path(path)
        self._key = key

    def load(self) -> list[str]:
        """Returns vendor ids in configured order; duplicates are kept."""
        if not self._path.is_file():
            raise ConfigurationMissingError(f"Arquivo de configuracao de vendors nao encontrado: {self._path}")

        try:
            values = dotenv_values(self._path, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationMissingError(f"Falha ao ler configuracao de vendors: {self._path}") from exc

        raw = values.get(self._key)
        if raw is None:
            raise ConfigurationMissingError(f"Chave {self._key} ausente em {self._path}")

        vendors = raw.split()
        logger.info("Vendors carregados de %s: %d", self._path, len(vendors))
        return vendors
