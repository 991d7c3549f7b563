"""
Verdict assembly over the requests captured during page load.

Filters the captured requests down to Google tracking calls, picks
the first one carrying a ``gcs`` parameter and decodes it.  Earlier
tracking requests without ``gcs`` are skipped.
"""

from __future__ import annotations

from collections.abc import Sequence

from consent_check.analysis import consent_decoder, tracking_rules
from consent_check.models import tracking, verdict
from consent_check.utils import logger

log = logger.create_logger("Verdict")

NO_TRACKING_SAMPLE_SIZE = 10


def find_consent_request(tracking_urls: Sequence[str]) -> str | None:
    """Return the first URL whose query carries a non-empty ``gcs``."""
    for request_url in tracking_urls:
        if consent_decoder.parse_consent_signal(request_url).gcs:
            return request_url
    return None


def assess_requests(
    requests: Sequence[str | tracking.CapturedRequest],
    rules: tracking.TrackingRules | None = None,
) -> verdict.Verdict:
    """Build the verdict for one page load.

    Args:
        requests: Every outbound request observed, in arrival order.
        rules: Classifier rules; ``None`` selects the configured set.

    Returns:
        The verdict for the page.
    """
    all_urls = tracking_rules.request_urls(requests)
    tracking_urls = tracking_rules.filter_tracking_requests(all_urls, rules)
    log.debug("Classified requests", {"total": len(all_urls), "tracking": len(tracking_urls)})

    if not tracking_urls:
        sample = all_urls[:NO_TRACKING_SAMPLE_SIZE]
        return verdict.NoTrackingVerdict(
            message="No Google tracking requests detected",
            details=(
                "The website does not appear to use Google Analytics, Google Ads,"
                f" or Google Tag Manager. Found {len(all_urls)} total requests."
                f" First {NO_TRACKING_SAMPLE_SIZE}: {', '.join(sample)}"
            ),
        )

    consent_url = find_consent_request(tracking_urls)
    if consent_url is None:
        return verdict.UnknownVerdict(
            message=consent_decoder.NO_CONSENT_MODE_MESSAGE,
            details=(
                f"Found {len(tracking_urls)} Google requests but none contain consent"
                f" parameters. All requests: {' | '.join(tracking_urls)}"
            ),
        )

    log.debug("Consent request selected", {"url": consent_url})
    return consent_decoder.decode_signal(consent_decoder.parse_consent_signal(consent_url))
