"""
Google Consent Mode decoding.

``gcs`` has the form ``G1xy`` where ``x`` is the ad_storage state and
``y`` the analytics_storage state (``1`` granted, ``0`` denied).
``gcd`` is echoed for diagnosis but never changes the verdict.
"""

from __future__ import annotations

from consent_check.models import tracking, verdict
from consent_check.utils import url as url_mod

GCS_PREFIX = "G1"

NO_CONSENT_MODE_MESSAGE = "No consent mode detected - gcs parameter not found in Google tracking requests"


def parse_consent_signal(url: str) -> tracking.ConsentSignal:
    """Read the ``gcs`` and ``gcd`` query parameters from *url*.

    Blank values are treated as absent.
    """
    return tracking.ConsentSignal(
        gcs=url_mod.get_query_param(url, "gcs"),
        gcd=url_mod.get_query_param(url, "gcd"),
    )


def _storage_state(flag: str) -> str:
    return "granted" if flag == "1" else "denied"


def decode(gcs: str | None, gcd: str | None = None) -> verdict.Verdict:
    """Turn a consent signal into a verdict.

    Total over all inputs: unknown formats become ``unknown``
    verdicts rather than errors.
    """
    if not gcs:
        return verdict.UnknownVerdict(
            message=NO_CONSENT_MODE_MESSAGE,
            details=(
                "The website may not be using Google Consent Mode,"
                " or consent mode is not properly configured"
            ),
        )

    if not gcs.startswith(GCS_PREFIX):
        return verdict.UnknownVerdict(
            gcs_value=gcs,
            gcd_value=gcd,
            message="Unrecognized gcs parameter format",
            details=f"Expected format G1xy but got: {gcs}",
        )

    code = gcs[len(GCS_PREFIX):]
    if code == "11":
        return verdict.FailVerdict(
            gcs_value=gcs,
            gcd_value=gcd,
            message="Consent mode allows tracking by default",
            details=(
                "Both ad_storage and analytics_storage are set to 'granted' by default,"
                " which means tracking is enabled before user consent"
            ),
        )
    if code == "00":
        return verdict.PassVerdict(
            gcs_value=gcs,
            gcd_value=gcd,
            message="Consent mode properly denies tracking by default",
            details=(
                "Both ad_storage and analytics_storage are set to 'denied' by default,"
                " which is the recommended configuration"
            ),
        )

    ad_storage = _storage_state(code[0:1])
    analytics_storage = _storage_state(code[1:2])
    return verdict.UnknownVerdict(
        gcs_value=gcs,
        gcd_value=gcd,
        message=f"Partial consent detected: {code}",
        details=f"Mixed consent state - ad_storage: {ad_storage}, analytics_storage: {analytics_storage}",
    )


def decode_signal(signal: tracking.ConsentSignal) -> verdict.Verdict:
    """Decode a parsed ``ConsentSignal``."""
    return decode(signal.gcs, signal.gcd)
