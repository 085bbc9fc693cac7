"""Operator email notification for authentication failures."""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from financial_reporter.core.settings import Settings


logger = logging.getLogger(__name__)


class EmailNotifier:
    """Sends the raw reporter output to the configured operator address."""

    def __init__(self, settings: Settings, timeout_seconds: int = 30):
        self._settings = settings
        self._timeout_seconds = timeout_seconds

    def build_message(self, vendor: str, raw_output: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = f"Reporter erro: verificar token de acesso (vendor {vendor})"
        message["From"] = self._settings.smtp_sender
        message["To"] = self._settings.admin_email
        message.set_content(raw_output or "(reporter sem saida)")
        return message

    def notify_auth_failure(self, vendor: str, raw_output: str) -> bool:
        """Returns False when nothing was sent; never raises."""
        if not self._settings.admin_email:
            logger.warning("REPORTER_ADMIN_EMAIL nao configurado; notificacao de token ignorada.")
            return False

        message = self.build_message(vendor, raw_output)
        try:
            with smtplib.SMTP(
                self._settings.smtp_host,
                self._settings.smtp_port,
                timeout=self._timeout_seconds,
            ) as smtp:
                if self._settings.smtp_use_tls:
                    smtp.starttls()
                if self._settings.smtp_username:
                    smtp.login(self._settings.smtp_username, self._settings.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Falha ao enviar notificacao para %s: %s", self._settings.admin_email, exc)
            return False

        logger.info("Notificacao de falha de autenticacao enviada para %s", self._settings.admin_email)
        return True
