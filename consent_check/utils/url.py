"""
URL helpers for validating check targets and reading query parameters.
"""

from __future__ import annotations

from urllib import parse

from consent_check.utils.errors import InvalidUrlError

_ALLOWED_SCHEMES = frozenset(["http", "https"])


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL string."""
    try:
        parsed = parse.urlparse(url)
        return parsed.hostname or "unknown"
    except ValueError:
        return "unknown"


def validate_target_url(url: str | None) -> str:
    """Check that *url* is an absolute http(s) URL with a host.

    Args:
        url: Raw user input.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        InvalidUrlError: If the URL is missing or malformed.
    """
    if not url or not url.strip():
        raise InvalidUrlError("URL is required")

    candidate = url.strip()
    try:
        parsed = parse.urlsplit(candidate)
        hostname = parsed.hostname
        # Accessing .port validates the port component.
        parsed.port
    except ValueError as exc:
        raise InvalidUrlError("Invalid URL format") from exc

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES or not hostname:
        raise InvalidUrlError("Invalid URL format")
    if any(ch.isspace() for ch in candidate):
        raise InvalidUrlError("Invalid URL format")
    return candidate


def get_query_param(url: str, name: str) -> str | None:
    """Return the first non-empty value of query parameter *name*.

    Malformed URLs and missing or blank values all yield ``None``.
    """
    try:
        query = parse.urlsplit(url).query
    except ValueError:
        return None
    for key, value in parse.parse_qsl(query, keep_blank_values=True):
        if key == name:
            return value or None
    return None
