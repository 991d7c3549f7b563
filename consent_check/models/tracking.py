"""Pydantic models for captured requests, consent signals, and tracking rules."""

from __future__ import annotations

import pydantic

from consent_check.utils import serialization


class CapturedRequest(pydantic.BaseModel):
    """An outbound request URL observed while the page loaded.

    ``sequence`` is the 0-based arrival index within one probe
    session; ordering by it reproduces the order the browser
    issued the requests.
    """

    model_config = pydantic.ConfigDict(
        frozen=True,
        alias_generator=serialization.snake_to_camel,
        populate_by_name=True,
    )

    url: str
    sequence: int = pydantic.Field(ge=0)
    resource_type: str = "other"
    method: str = "GET"
    timestamp: str = ""


class ConsentSignal(pydantic.BaseModel):
    """Consent Mode parameters read from one request's query string."""

    model_config = pydantic.ConfigDict(frozen=True)

    gcs: str | None = None
    gcd: str | None = None


class StructuralRule(pydantic.BaseModel):
    """A two-part substring predicate.

    Matches when the URL contains ``required`` and at least one
    of ``any_of``.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    name: str
    required: str = pydantic.Field(min_length=1)
    any_of: tuple[str, ...] = pydantic.Field(min_length=1)

    def matches(self, url: str) -> bool:
        """Return True when *url* satisfies both halves of the rule."""
        return self.required in url and any(fragment in url for fragment in self.any_of)


class TrackingRules(pydantic.BaseModel):
    """Rule set deciding which request URLs are Google tracking calls."""

    model_config = pydantic.ConfigDict(frozen=True)

    fragments: tuple[str, ...]
    structural: tuple[StructuralRule, ...] = ()

    @pydantic.field_validator("fragments")
    @classmethod
    def _no_empty_fragments(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # An empty fragment would match every URL.
        if any(not fragment for fragment in value):
            raise ValueError("tracking fragments must be non-empty strings")
        return value
