"""
Error types for consent checks and consistent error message extraction.
"""

from __future__ import annotations

from typing import Literal

ProbeFailureKind = Literal["launch", "navigation"]


class ConsentCheckError(Exception):
    """Base class for failures that stop a consent check."""


class InvalidUrlError(ConsentCheckError):
    """The target URL is missing or is not an absolute http(s) URL.

    Raised before any browser work starts.
    """


class ProbeError(ConsentCheckError):
    """The browser probe could not load the target page.

    ``kind`` separates a browser that never started from a page
    that failed to load (timeout, DNS, TLS).  ``detail`` keeps the
    underlying error text; the exception message is the
    user-facing summary.
    """

    def __init__(self, kind: ProbeFailureKind, detail: str) -> None:
        self.kind: ProbeFailureKind = kind
        self.detail = detail
        if kind == "launch":
            message = f"Failed to launch browser: {detail}. Please ensure Playwright is properly installed."
        else:
            message = f"Failed to load website: {detail}"
        super().__init__(message)


def get_error_message(error: BaseException | object) -> str:
    """
    Safely extract an error message from an unknown error type.
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return "Unknown error"
