# ski_scheduler/adapters/outbound/notifications/error_notifier.py

"""
Operational error e-mails.

Storage failures and unhandled errors are mailed to the maintainers
through SMTP (aiosmtplib). Delivery is a side channel: a failure to
send is logged and never replaces the error being reported.
"""

import logging
from email.message import EmailMessage

import aiosmtplib

from ski_scheduler.adapters.configuration.config import Settings

logger = logging.getLogger(__name__)


class ErrorNotifier:
    """Sends plain text error reports to the configured address."""

    def __init__(self, config: Settings):
        self.config = config
        if not config.smtp_configured:
            logger.warning(
                "Error e-mails disabled: SMTP_HOST, ERROR_EMAIL_FROM or ERROR_EMAIL_TO not set"
            )

    @property
    def enabled(self) -> bool:
        return self.config.smtp_configured

    def build_message(self, subject: str, text: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.ERROR_EMAIL_FROM
        message["To"] = self.config.ERROR_EMAIL_TO
        message["Subject"] = subject
        message.set_content(text)
        return message

    async def notify(self, subject: str, text: str) -> bool:
        """
        Send an error report.

        Returns:
            True if the message was handed to the SMTP server
        """
        if not self.enabled:
            logger.debug(f"Error e-mail skipped (not configured): {subject}")
            return False

        try:
            await aiosmtplib.send(
                self.build_message(subject, text),
                hostname=self.config.SMTP_HOST,
                port=self.config.SMTP_PORT,
                username=self.config.SMTP_USERNAME,
                password=self.config.SMTP_PASSWORD,
                start_tls=self.config.SMTP_USE_TLS,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.exception(f"Failed to send error e-mail '{subject}': {e}")
            return False

        logger.info(f"Error e-mail sent: {subject}")
        return True
