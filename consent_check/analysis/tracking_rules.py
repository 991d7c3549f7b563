"""
Google tracking request classification.

A request counts as Google tracking traffic when its URL contains a
known Google tracking fragment, or satisfies one of the structural
rules that catch first-party tag-manager proxies and Measurement
Protocol hits on unknown hosts.  Matching is case-sensitive substring
matching over the whole URL, query string included.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from consent_check import config
from consent_check.data import loader
from consent_check.models import tracking

_RequestT = TypeVar("_RequestT", str, tracking.CapturedRequest)


def active_rules() -> tracking.TrackingRules:
    """Return the configured rule set, falling back to the bundled one."""
    return loader.get_tracking_rules(config.get_settings().rules_file)


def is_tracking_request(url: str, rules: tracking.TrackingRules | None = None) -> bool:
    """Decide whether *url* is a Google tracking/analytics/ads call."""
    rules = rules if rules is not None else active_rules()
    if any(fragment in url for fragment in rules.fragments):
        return True
    return any(rule.matches(url) for rule in rules.structural)


def filter_tracking_requests(
    requests: Iterable[_RequestT],
    rules: tracking.TrackingRules | None = None,
) -> list[_RequestT]:
    """Keep only tracking requests, preserving arrival order.

    Accepts plain URL strings or ``CapturedRequest`` records and
    returns items of the same kind.
    """
    rules = rules if rules is not None else active_rules()
    return [r for r in requests if is_tracking_request(_url_of(r), rules)]


def _url_of(request: str | tracking.CapturedRequest) -> str:
    return request if isinstance(request, str) else request.url


def request_urls(requests: Sequence[str | tracking.CapturedRequest]) -> list[str]:
    """Return the URL of each request, in order."""
    return [_url_of(r) for r in requests]
