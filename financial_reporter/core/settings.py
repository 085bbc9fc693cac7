"""Application settings loaded from .env."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


def _as_int(raw: str | None, default: int) -> int:
    try:
        return int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default


def _as_float(raw: str | None, default: float) -> float:
    try:
        return float(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default


def _as_bool(raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _resolve_project_path(raw: str, project_root: Path) -> Path:
    path = Path(raw).expanduser()
    if path.is_absolute():
        return path
    return (project_root / path).resolve()


def _env_path(name: str, default: str, project_root: Path) -> Path:
    raw = os.getenv(name, default).strip() or default
    return _resolve_project_path(raw, project_root)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the reporter client, notifications and logging."""

    reporter_java_executable: str
    reporter_jar_file: str
    reporter_properties_file: str
    reporter_command: str
    reporter_work_dir: Path
    reporter_financial_dir: Path
    reporter_vendor_config: Path
    reporter_vendors_key: str
    reporter_timeout_seconds: int
    reporter_vendor_delay_seconds: float
    reporter_lock_file: Path
    admin_email: str
    smtp_host: str
    smtp_port: int
    smtp_sender: str
    smtp_username: str
    smtp_password: str
    smtp_use_tls: bool
    log_level: str
    log_file: Path

    @classmethod
    def from_env(cls) -> "Settings":
        project_root = Path(__file__).resolve().parents[2]

        return cls(
            reporter_java_executable=os.getenv("REPORTER_JAVA_EXECUTABLE", "java").strip() or "java",
            reporter_jar_file=os.getenv("REPORTER_JAR_FILE", "Reporter.jar").strip() or "Reporter.jar",
            reporter_properties_file=(
                os.getenv("REPORTER_PROPERTIES_FILE", "Reporter.properties").strip() or "Reporter.properties"
            ),
            reporter_command=os.getenv("REPORTER_COMMAND", "Finance.getReport").strip() or "Finance.getReport",
            reporter_work_dir=_env_path("REPORTER_WORK_DIR", "bin", project_root),
            reporter_financial_dir=_env_path("REPORTER_FINANCIAL_DIR", "reports/financial", project_root),
            reporter_vendor_config=_env_path("REPORTER_VENDOR_CONFIG", "bin/vendor.conf", project_root),
            reporter_vendors_key=os.getenv("REPORTER_VENDORS_KEY", "VENDORS").strip() or "VENDORS",
            reporter_timeout_seconds=_as_int(os.getenv("REPORTER_TIMEOUT_SECONDS"), 600),
            reporter_vendor_delay_seconds=_as_float(os.getenv("REPORTER_VENDOR_DELAY_SECONDS"), 1.0),
            reporter_lock_file=_env_path("REPORTER_LOCK_FILE", "reports/.financial.lock", project_root),
            admin_email=os.getenv("REPORTER_ADMIN_EMAIL", "").strip(),
            smtp_host=os.getenv("SMTP_HOST", "localhost").strip() or "localhost",
            smtp_port=_as_int(os.getenv("SMTP_PORT"), 25),
            smtp_sender=os.getenv("SMTP_SENDER", "reporter@localhost").strip() or "reporter@localhost",
            smtp_username=os.getenv("SMTP_USERNAME", "").strip(),
            smtp_password=os.getenv("SMTP_PASSWORD", "").strip(),
            smtp_use_tls=_as_bool(os.getenv("SMTP_USE_TLS"), False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper().strip() or "INFO",
            log_file=_env_path("LOG_FILE", "logs/financial_reporter.log", project_root),
        )

    @property
    def reporter_jar_path(self) -> Path:
        return self.reporter_work_dir / self.reporter_jar_file

    @property
    def reporter_properties_path(self) -> Path:
        return self.reporter_work_dir / self.reporter_properties_file

    def missing_reporter_files(self) -> list[str]:
        """Lists reporter files absent from the working directory."""
        missing = []
        if not self.reporter_work_dir.is_dir():
            missing.append(str(self.reporter_work_dir))
            return missing
        if not self.reporter_jar_path.is_file():
            missing.append(str(self.reporter_jar_path))
        if not self.reporter_properties_path.is_file():
            missing.append(str(self.reporter_properties_path))
        return missing


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns cached settings instance."""
    return Settings.from_env()
