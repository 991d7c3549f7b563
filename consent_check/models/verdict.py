"""Pydantic models for consent verdicts.

A verdict is a tagged union discriminated on ``status``.  Each case
declares only the fields that make sense for it, so a
``no_tracking`` verdict cannot carry consent values.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

import pydantic

from consent_check.utils import serialization

VerdictStatus = Literal["pass", "fail", "unknown", "no_tracking"]

_VERDICT_CONFIG = pydantic.ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=serialization.snake_to_camel,
    populate_by_name=True,
)


class _VerdictMixin:
    """Serialization shared by every verdict case."""

    def to_response(self) -> dict[str, Any]:
        """Return the wire form: camelCase keys, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)  # type: ignore[attr-defined]


class PassVerdict(_VerdictMixin, pydantic.BaseModel):
    """Both storages are denied by default."""

    model_config = _VERDICT_CONFIG

    status: Literal["pass"] = "pass"
    gcs_value: str
    gcd_value: str | None = None
    message: str
    details: str | None = None


class FailVerdict(_VerdictMixin, pydantic.BaseModel):
    """Both storages are granted before the visitor has consented."""

    model_config = _VERDICT_CONFIG

    status: Literal["fail"] = "fail"
    gcs_value: str
    gcd_value: str | None = None
    message: str
    details: str | None = None


class UnknownVerdict(_VerdictMixin, pydantic.BaseModel):
    """Consent state is missing, partial, or in an unexpected format."""

    model_config = _VERDICT_CONFIG

    status: Literal["unknown"] = "unknown"
    gcs_value: str | None = None
    gcd_value: str | None = None
    message: str
    details: str | None = None


class NoTrackingVerdict(_VerdictMixin, pydantic.BaseModel):
    """No Google tracking request fired during page load."""

    model_config = _VERDICT_CONFIG

    status: Literal["no_tracking"] = "no_tracking"
    message: str
    details: str | None = None


Verdict = Annotated[
    PassVerdict | FailVerdict | UnknownVerdict | NoTrackingVerdict,
    pydantic.Field(discriminator="status"),
]
