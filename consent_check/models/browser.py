"""Pydantic models for browser probe results."""

from __future__ import annotations

import pydantic

from consent_check.models import tracking


class NavigationResult(pydantic.BaseModel):
    """Result of a navigation attempt."""

    success: bool
    status_code: int | None
    final_url: str | None
    error_message: str | None


class ProbeResult(pydantic.BaseModel):
    """Everything a probe session observed for one target URL."""

    target_url: str
    final_url: str
    requests: list[tracking.CapturedRequest]
