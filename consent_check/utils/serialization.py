"""Shared serialization helpers for camelCase conversion.

Provides the ``snake_to_camel`` alias generator used by the
Pydantic verdict and capture models so that JSON responses carry
``gcsValue`` rather than ``gcs_value``.
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as ``"gcs_value"``.

    Returns:
        The camelCase equivalent, e.g. ``"gcsValue"``.
    """
    head, *rest = name.split("_")
    return head + "".join(w.capitalize() for w in rest)
