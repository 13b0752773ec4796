"""Delivering the end-of-run notification by email or through the log."""

import logging
import os
import smtplib
import ssl
from collections.abc import Mapping
from email.message import EmailMessage
from email.utils import formataddr

from ..__util__ import ConfigError, ConfigMissing, NotifyError
from ..config.schema import EmailConfig
from .summary import Notification

logger = logging.getLogger(__name__)

ENV_EMAIL_ADDRESS = "BACKUPER_EMAIL_ADDRESS"
ENV_EMAIL_PASSWORD = "BACKUPER_EMAIL_PASSWORD"


class LogNotifier:
    """Write the notification to the log."""

    def send(self, notification: Notification) -> None:
        level = logging.ERROR if notification.failed else logging.INFO
        logger.log(level, notification.subject)
        for line in notification.body.splitlines():
            if line:
                logger.log(level, line)


class EmailNotifier:
    """Send the notification as a plain-text email over SMTP.

    Port 465 uses implicit TLS, any other port STARTTLS.
    """

    def __init__(self, config: EmailConfig, address: str, password: str) -> None:
        self._config = config
        self._address = address
        self._password = password

    def build_message(self, notification: Notification) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = formataddr((self._config.sender_name, self._address))
        msg["To"] = formataddr(
            (self._config.recipient_name, self._config.recipient or self._address)
        )
        msg["Subject"] = notification.subject
        msg.set_content(notification.body)
        return msg

    def send(self, notification: Notification) -> None:
        msg = self.build_message(notification)
        host, port = self._config.smtp_host, self._config.smtp_port
        context = ssl.create_default_context()

        logger.info("Sending notification email via %s:%d", host, port)
        try:
            if port == 465:
                with smtplib.SMTP_SSL(host, port, context=context) as server:
                    server.login(self._address, self._password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(host, port) as server:
                    server.starttls(context=context)
                    server.login(self._address, self._password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotifyError(f"Failed to send notification email: {e}") from e


def select_notifier(
    mode: str,
    config: EmailConfig,
    environ: Mapping[str, str] | None = None,
):
    """Pick the notifier for ``mode`` (auto, email or log).

    ``auto`` sends email when both email variables are set and logs otherwise.
    """
    if environ is None:
        environ = os.environ

    if mode == "log":
        return LogNotifier()

    address = environ.get(ENV_EMAIL_ADDRESS)
    password = environ.get(ENV_EMAIL_PASSWORD)

    if mode == "auto":
        if address and password:
            return EmailNotifier(config, address, password)
        logger.debug("Email credentials not set, notifying through the log")
        return LogNotifier()

    if mode == "email":
        if not address:
            raise ConfigMissing(ENV_EMAIL_ADDRESS)
        if not password:
            raise ConfigMissing(ENV_EMAIL_PASSWORD)
        return EmailNotifier(config, address, password)

    raise ConfigError(f"Unknown notify mode: {mode}")
