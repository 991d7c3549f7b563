"""
Runtime configuration for consent checks.

Centralises environment variable names and default values for the
browser probe and the tracking rule set.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import pydantic
import pydantic_settings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    " (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(pydantic_settings.BaseSettings):
    """Configuration for the browser probe and classifier.

    Attributes:
        navigation_timeout_ms: Upper bound for reaching network idle.
        settle_delay_ms: Extra wait after load to catch late beacons.
        max_tracked_requests: Cap on recorded request URLs per check.
        user_agent: User agent string for the browser context.
        headless: Whether Chromium runs without a window.
        rules_file: Optional JSON file replacing the bundled
            tracking rules.
    """

    navigation_timeout_ms: int = pydantic.Field(
        default=30000, gt=0, validation_alias="CONSENT_CHECK_NAVIGATION_TIMEOUT_MS"
    )
    settle_delay_ms: int = pydantic.Field(
        default=2000, ge=0, validation_alias="CONSENT_CHECK_SETTLE_DELAY_MS"
    )
    max_tracked_requests: int = pydantic.Field(
        default=5000, gt=0, validation_alias="CONSENT_CHECK_MAX_TRACKED_REQUESTS"
    )
    user_agent: str = pydantic.Field(
        default=DEFAULT_USER_AGENT, validation_alias="CONSENT_CHECK_USER_AGENT"
    )
    headless: bool = pydantic.Field(
        default=True, validation_alias="CONSENT_CHECK_HEADLESS"
    )
    rules_file: str | None = pydantic.Field(
        default=None, validation_alias="CONSENT_CHECK_RULES_FILE"
    )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()
