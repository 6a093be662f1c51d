"""Unit tests for operational error e-mails."""

import aiosmtplib
import pytest

from ski_scheduler.adapters.configuration.config import Settings
from ski_scheduler.adapters.outbound.notifications.error_notifier import ErrorNotifier


@pytest.fixture
def smtp_settings() -> Settings:
    return Settings(
        SECRET_KEY="x",
        SMTP_HOST="smtp.example.com",
        ERROR_EMAIL_FROM="scheduler@example.com",
        ERROR_EMAIL_TO="ops@example.com",
    )


class TestErrorNotifier:
    """Tests for sending error reports."""

    async def test_disabled_without_smtp(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that nothing is sent when SMTP is not configured."""
        sent = []

        async def fake_send(message, **kwargs):
            sent.append(message)

        monkeypatch.setattr(aiosmtplib, "send", fake_send)
        notifier = ErrorNotifier(Settings(SECRET_KEY="x", SMTP_HOST=None))

        assert not notifier.enabled
        assert await notifier.notify("Storage error", "details") is False
        assert sent == []

    async def test_sends_message(self, smtp_settings: Settings, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a configured notifier hands the report to SMTP."""
        sent = []

        async def fake_send(message, **kwargs):
            sent.append((message, kwargs))

        monkeypatch.setattr(aiosmtplib, "send", fake_send)
        notifier = ErrorNotifier(smtp_settings)

        assert await notifier.notify("Storage error", "connection refused") is True

        message, kwargs = sent[0]
        assert message["Subject"] == "Storage error"
        assert message["To"] == "ops@example.com"
        assert "connection refused" in message.get_content()
        assert kwargs["hostname"] == "smtp.example.com"

    async def test_send_failure_is_swallowed(self, smtp_settings: Settings,
                                             monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an SMTP failure is reported as False instead of raised."""

        async def failing_send(message, **kwargs):
            raise aiosmtplib.SMTPException("server unavailable")

        monkeypatch.setattr(aiosmtplib, "send", failing_send)
        notifier = ErrorNotifier(smtp_settings)

        assert await notifier.notify("Storage error", "details") is False
