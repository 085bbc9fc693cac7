"""Moves downloaded reports into the financial reports directory."""
from __future__ import annotations

import errno
import fcntl
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path

from financial_reporter.reporter.exceptions import ArtifactPlacementError


logger = logging.getLogger(__name__)


class ExecutionLock:
    """File lock held for a whole run so two runs never race on one artifact name."""

    def __init__(self, lock_file: Path):
        self.lock_file = Path(lock_file)
        self.file_handle = None

    def __enter__(self) -> "ExecutionLock":
        """Acquire lock (blocking)."""
        self.lock_file.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Aguardando lock de execucao: %s", self.lock_file)
        self.file_handle = open(self.lock_file, "w", encoding="utf-8")
        try:
            fcntl.flock(self.file_handle.fileno(), fcntl.LOCK_EX)
            self.file_handle.write(f"PID: {os.getpid()}\n")
            self.file_handle.write(f"Started: {datetime.now().isoformat()}\n")
            self.file_handle.flush()
        except OSError:
            self.file_handle.close()
            self.file_handle = None
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Release lock."""
        if self.file_handle is None:
            return
        try:
            fcntl.flock(self.file_handle.fileno(), fcntl.LOCK_UN)
        finally:
            self.file_handle.close()
            self.file_handle = None


class ArtifactPlacer:
    """Renames a report from the client's working directory into the destination."""

    def __init__(self, source_dir: Path, destination_dir: Path):
        self._source_dir = Path(source_dir)
        self._destination_dir = Path(destination_dir)

    def place(self, artifact_name: str) -> Path:
        source = self._source_dir / artifact_name
        if not source.is_file():
            raise ArtifactPlacementError(f"Arquivo esperado nao encontrado apos download: {source}")

        try:
            self._destination_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ArtifactPlacementError(f"Nao foi possivel criar {self._destination_dir}: {exc}") from exc

        target = self._destination_dir / artifact_name
        try:
            os.replace(source, target)
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise ArtifactPlacementError(f"Falha ao mover {source} para {target}: {exc}") from exc
            self._copy_then_rename(source, target)

        logger.debug("Relatorio movido: %s -> %s", source, target)
        return target

    @staticmethod
    def _copy_then_rename(source: Path, target: Path) -> None:
        # Different filesystem: stage next to the target so the final rename stays atomic.
        staging = target.with_name(f".{target.name}.partial")
        try:
            shutil.copy2(source, staging)
            os.replace(staging, target)
        except OSError as exc:
            staging.unlink(missing_ok=True)
            raise ArtifactPlacementError(f"Falha ao copiar {source} para {target}: {exc}") from exc

        try:
            source.unlink()
        except OSError as exc:
            logger.warning("Relatorio copiado, mas o original nao foi removido: %s (%s)", source, exc)
