"""Unit tests for the telemetry service."""

from unittest.mock import patch

import pytest

from app.config import Settings
from app.services.telemetry import (
    capture_telemetry,
    get_telemetry_client,
    shutdown_telemetry,
)

TELEMETRY_MODULE = "app.services.telemetry"


def make_settings(**overrides) -> Settings:
    """Build settings for telemetry tests."""
    values = {
        "database_url": "sqlite:///:memory:",
        "telemetry_disabled": False,
        "telemetry_host": "https://telemetry.example.com",
        "telemetry_api_key": "phc_test",
        "telemetry_distinct_id": "install-123",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def fresh_client():
    """Drop the cached client around each test."""
    get_telemetry_client.cache_clear()
    yield
    get_telemetry_client.cache_clear()


class TestGetTelemetryClient:
    """Tests for get_telemetry_client."""

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_builds_client_from_settings(self, mock_settings, mock_posthog):
        """The client is created with the project key and host."""
        mock_settings.return_value = make_settings()

        client = get_telemetry_client()

        assert client is mock_posthog.return_value
        mock_posthog.assert_called_once_with(
            "phc_test", host="https://telemetry.example.com"
        )

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_client_is_shared(self, mock_settings, mock_posthog):
        """Repeated calls reuse one client."""
        mock_settings.return_value = make_settings()

        assert get_telemetry_client() is get_telemetry_client()
        mock_posthog.assert_called_once()

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_no_client_when_disabled(self, mock_settings, mock_posthog):
        """Disabled telemetry never creates a client."""
        mock_settings.return_value = make_settings(telemetry_disabled=True)

        assert get_telemetry_client() is None
        mock_posthog.assert_not_called()

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_no_client_without_api_key(self, mock_settings, mock_posthog):
        """The default empty API key leaves telemetry off."""
        mock_settings.return_value = make_settings(telemetry_api_key="")

        assert get_telemetry_client() is None
        mock_posthog.assert_not_called()


class TestCaptureTelemetry:
    """Tests for capture_telemetry."""

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_captures_event(self, mock_settings, mock_posthog):
        """Enabled telemetry hands the event to the client queue."""
        mock_settings.return_value = make_settings()

        capture_telemetry("survey created")

        mock_posthog.return_value.capture.assert_called_once_with(
            distinct_id="install-123",
            event="survey created",
        )

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_disabled_sends_nothing(self, mock_settings, mock_posthog):
        """Disabled telemetry is a no-op."""
        mock_settings.return_value = make_settings(telemetry_disabled=True)

        capture_telemetry("survey created")

        mock_posthog.return_value.capture.assert_not_called()

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_missing_api_key_sends_nothing(self, mock_settings, mock_posthog):
        """No event is sent when the project key is empty."""
        mock_settings.return_value = make_settings(telemetry_api_key="")

        capture_telemetry("survey created")

        mock_posthog.return_value.capture.assert_not_called()


class TestShutdownTelemetry:
    """Tests for shutdown_telemetry."""

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_flushes_client(self, mock_settings, mock_posthog):
        """Shutdown flushes the shared client."""
        mock_settings.return_value = make_settings()

        shutdown_telemetry()

        mock_posthog.return_value.shutdown.assert_called_once()

    @patch(f"{TELEMETRY_MODULE}.Posthog")
    @patch(f"{TELEMETRY_MODULE}.get_settings")
    def test_disabled_shutdown_is_noop(self, mock_settings, mock_posthog):
        """Shutdown without a client does nothing."""
        mock_settings.return_value = make_settings(telemetry_disabled=True)

        shutdown_telemetry()

        mock_posthog.assert_not_called()
