"""
Browser session management for concurrent consent checks.
Each BrowserSession instance owns its own Playwright driver, browser,
context and page, so concurrent checks never share browser state.
"""

from __future__ import annotations

import asyncio
import types
from datetime import datetime, timezone

from playwright import async_api

from consent_check import config
from consent_check.models import browser, tracking
from consent_check.utils import errors, logger

log = logger.create_logger("BrowserSession")

LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class BrowserSession:
    """
    Manages an isolated headless browser for a single consent check.

    Use as an async context manager so the browser is released on
    every exit path::

        async with BrowserSession(settings) as session:
            result = await session.probe(url)
    """

    def __init__(self, settings: config.Settings | None = None) -> None:
        """Initialise a new browser session with empty state."""
        self._settings = settings or config.get_settings()
        self._playwright: async_api.Playwright | None = None
        self._browser: async_api.Browser | None = None
        self._context: async_api.BrowserContext | None = None
        self._page: async_api.Page | None = None

        self._captured_requests: list[tracking.CapturedRequest] = []
        self._limit_logged = False

    async def __aenter__(self) -> BrowserSession:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()

    # ==========================================================================
    # State Getters
    # ==========================================================================

    def get_captured_requests(self) -> list[tracking.CapturedRequest]:
        """Return a copy of the requests captured so far, in arrival order."""
        return list(self._captured_requests)

    # ==========================================================================
    # Browser Lifecycle
    # ==========================================================================

    async def launch_browser(self) -> None:
        """Launch headless Chromium with a fresh context and page.

        Raises:
            ProbeError: If Playwright or Chromium cannot start.
        """
        if self._page is not None:
            raise RuntimeError("Browser session already launched")

        log.info("Launching browser", {"headless": self._settings.headless})
        try:
            self._playwright = await async_api.async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._settings.headless,
                args=LAUNCH_ARGS,
            )
            self._context = await self._browser.new_context(user_agent=self._settings.user_agent)
            self._page = await self._context.new_page()
        except Exception as exc:
            log.error("Browser launch failed", {"error": errors.get_error_message(exc)})
            await self.close()
            raise errors.ProbeError("launch", errors.get_error_message(exc)) from exc

        self._page.on("request", self._on_request)
        log.debug("Browser launched")

    def _on_request(self, request: async_api.Request) -> None:
        """Record an outbound request in arrival order."""
        if len(self._captured_requests) >= self._settings.max_tracked_requests:
            if not self._limit_logged:
                log.warn("Request tracking limit reached", {"limit": self._settings.max_tracked_requests})
                self._limit_logged = True
            return

        self._captured_requests.append(
            tracking.CapturedRequest(
                url=request.url,
                sequence=len(self._captured_requests),
                resource_type=request.resource_type,
                method=request.method,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )

    # ==========================================================================
    # Navigation
    # ==========================================================================

    async def navigate_to(self, url: str) -> browser.NavigationResult:
        """Navigate to *url* and wait until the network is idle.

        The wait is bounded by ``navigation_timeout_ms``; running out
        of time counts as a failed navigation.
        """
        if not self._page:
            raise RuntimeError("No browser session active")

        timeout = self._settings.navigation_timeout_ms
        log.debug("Navigating", {"url": url, "timeout": timeout})
        try:
            response = await self._page.goto(url, wait_until="networkidle", timeout=timeout)
        except Exception as exc:
            log.warn("Navigation error", {"url": url, "error": errors.get_error_message(exc)})
            return browser.NavigationResult(
                success=False,
                status_code=None,
                final_url=None,
                error_message=errors.get_error_message(exc),
            )

        status_code = response.status if response else None
        if status_code and status_code >= 400:
            # The page still loaded and may have fired its tags.
            log.warn("Page returned an error status", {"statusCode": status_code})

        final_url = self._page.url
        if final_url != url:
            log.info("Redirected", {"from": url, "to": final_url})
        return browser.NavigationResult(
            success=True,
            status_code=status_code,
            final_url=final_url,
            error_message=None,
        )

    async def wait_for_timeout(self, ms: int) -> None:
        """Wait for a specified number of milliseconds.

        Uses ``asyncio.sleep`` instead of Playwright's
        ``page.wait_for_timeout`` which is intended only
        for debugging.
        """
        await asyncio.sleep(ms / 1000)

    # ==========================================================================
    # Probe
    # ==========================================================================

    async def probe(self, url: str) -> browser.ProbeResult:
        """Load *url* and return every request observed during load.

        Raises:
            ProbeError: If the browser cannot start or the page
                cannot be loaded.
        """
        if self._page is None:
            await self.launch_browser()

        log.start_timer("navigation")
        nav_result = await self.navigate_to(url)
        log.end_timer("navigation", "Navigation complete")
        if not nav_result.success:
            raise errors.ProbeError("navigation", nav_result.error_message or "Unknown error")

        # Late-firing beacons usually arrive shortly after network idle.
        await self.wait_for_timeout(self._settings.settle_delay_ms)

        captured = self.get_captured_requests()
        log.info("Captured requests", {"count": len(captured), "statusCode": nav_result.status_code})
        return browser.ProbeResult(
            target_url=url,
            final_url=nav_result.final_url or url,
            requests=captured,
        )

    # ==========================================================================
    # Cleanup
    # ==========================================================================

    async def close(self) -> None:
        """Close the browser and clean up all resources."""
        log.debug("Closing browser session")
        if self._page:
            self._page.remove_listener("request", self._on_request)
            self._page = None

        if self._context:
            try:
                await self._context.close()
            except Exception as exc:
                log.debug("Context close error (non-fatal)", {"error": str(exc)})
            self._context = None

        if self._browser:
            try:
                await self._browser.close()
            except Exception as exc:
                log.debug("Browser close error (non-fatal)", {"error": str(exc)})
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as exc:
                log.debug("Playwright stop error (non-fatal)", {"error": str(exc)})
            self._playwright = None

        self._captured_requests.clear()
        log.debug("Browser session closed")
