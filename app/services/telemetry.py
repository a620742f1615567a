"""Anonymous usage telemetry.

Events go through the PostHog client, which queues them and delivers them
from its own background consumer so the calling request never waits on,
or fails because of, telemetry.
"""

from functools import lru_cache
from typing import Optional

from posthog import Posthog

from app.config import get_settings
from app.logging_config import get_logger

logger = get_logger(__name__)


@lru_cache
def get_telemetry_client() -> Optional[Posthog]:
    """Get the shared PostHog client.

    Returns:
        Posthog client, or None when telemetry is disabled or no project
        API key is configured
    """
    settings = get_settings()
    if not settings.telemetry_enabled:
        return None

    return Posthog(settings.telemetry_api_key, host=settings.telemetry_host)


def capture_telemetry(event_name: str) -> None:
    """Queue a usage event without blocking the caller.

    Does nothing when telemetry is disabled or has no API key.

    Args:
        event_name: Name of the usage event (e.g., "survey created")
    """
    client = get_telemetry_client()
    if client is None:
        logger.debug(f"Telemetry disabled, skipping event '{event_name}'")
        return

    client.capture(
        distinct_id=get_settings().telemetry_distinct_id,
        event=event_name,
    )
    logger.debug(f"Telemetry event '{event_name}' queued")


def shutdown_telemetry() -> None:
    """Flush queued events and stop the client's consumer thread."""
    client = get_telemetry_client()
    if client is not None:
        client.shutdown()
