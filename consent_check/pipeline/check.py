"""
Consent check pipeline.

Validates the target URL, probes it in an isolated browser session
and assembles the verdict from the captured requests.  Each call
creates its own BrowserSession, so concurrent checks are independent.
"""

from __future__ import annotations

from collections.abc import Callable

from consent_check import config
from consent_check.analysis import verdict as verdict_mod
from consent_check.browser import session as browser_session
from consent_check.data import loader
from consent_check.models import verdict
from consent_check.utils import logger, url as url_mod

log = logger.create_logger("Check")

SessionFactory = Callable[[config.Settings], browser_session.BrowserSession]


async def check_consent(
    url: str | None,
    settings: config.Settings | None = None,
    session_factory: SessionFactory = browser_session.BrowserSession,
) -> verdict.Verdict:
    """Check whether *url* denies Google tracking before consent.

    Args:
        url: Absolute http(s) URL of the page to check.
        settings: Probe configuration; read from the environment
            when omitted.
        session_factory: Builds the browser session for this check.

    Returns:
        The verdict for the page.

    Raises:
        InvalidUrlError: If *url* is missing or malformed.  No browser
            is started in that case.
        ProbeError: If the browser cannot start or the page cannot
            be loaded.
    """
    target_url = url_mod.validate_target_url(url)
    settings = settings or config.get_settings()
    # A broken rules file fails before any browser starts.
    rules = loader.get_tracking_rules(settings.rules_file)

    logger.reset_timers()
    log.section(f"Checking: {target_url}")
    log.info("Request received", {"domain": url_mod.extract_domain(target_url)})
    log.start_timer("total-check")

    async with session_factory(settings) as session:
        probe_result = await session.probe(target_url)

    result = verdict_mod.assess_requests(probe_result.requests, rules)
    log.info("Verdict", {"status": result.status, "gcs": getattr(result, "gcs_value", None)})
    log.end_timer("total-check", "Check complete")
    return result
