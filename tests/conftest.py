"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from consent_check import config
from consent_check.data import loader
from consent_check.models import tracking

# ── Request URL Factories ───────────────────────────────────────

PAGE_URL = "https://shop.example.com/"
ANALYTICS_NO_GCS = "https://www.google-analytics.com/g/collect?v=2&tid=G-ABC123&en=page_view"
ANALYTICS_DENIED = "https://region1.google-analytics.com/g/collect?v=2&tid=G-ABC123&gcs=G100&gcd=13l3l3l3l1"
ANALYTICS_GRANTED = "https://region1.google-analytics.com/g/collect?v=2&tid=G-ABC123&gcs=G111&gcd=13t3t3t3t1"
GTM_SCRIPT = "https://www.googletagmanager.com/gtm.js?id=GTM-XYZ"
FIRST_PARTY_SCRIPT = "https://shop.example.com/static/app.js"
FIRST_PARTY_IMAGE = "https://shop.example.com/img/logo.png"


@pytest.fixture(autouse=True)
def _clear_rules_cache() -> Iterator[None]:
    """Each test sees freshly loaded rule files."""
    loader.clear_cache()
    yield
    loader.clear_cache()


@pytest.fixture()
def bundled_rules() -> tracking.TrackingRules:
    """The rule set shipped with the package."""
    return loader.load_tracking_rules()


@pytest.fixture()
def fast_settings() -> config.Settings:
    """Settings that skip the post-load settle delay."""
    return config.Settings(
        CONSENT_CHECK_SETTLE_DELAY_MS=0,
        CONSENT_CHECK_NAVIGATION_TIMEOUT_MS=5000,
    )


@pytest.fixture()
def first_party_requests() -> list[str]:
    """A page load with no Google traffic at all."""
    return [PAGE_URL, FIRST_PARTY_SCRIPT, FIRST_PARTY_IMAGE]


@pytest.fixture()
def captured_requests() -> list[tracking.CapturedRequest]:
    """A page load where the first analytics hit omits gcs."""
    urls = [PAGE_URL, GTM_SCRIPT, ANALYTICS_NO_GCS, ANALYTICS_DENIED, ANALYTICS_GRANTED]
    return [
        tracking.CapturedRequest(url=u, sequence=i, timestamp="2026-01-01T00:00:00Z")
        for i, u in enumerate(urls)
    ]
