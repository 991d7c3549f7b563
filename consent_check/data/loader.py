"""
Data loader for the tracking rule set.
Loads the bundled JSON rules, or a replacement file named by
``CONSENT_CHECK_RULES_FILE``, into a validated ``TrackingRules``.

The bundled JSON file lives alongside this module.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

import pydantic

from consent_check.models import tracking
from consent_check.utils import logger

log = logger.create_logger("Rules")

# Resolve path to the data directory (same directory as this module)
_DATA_DIR = pathlib.Path(__file__).resolve().parent

BUNDLED_RULES_FILE = _DATA_DIR / "tracking-rules.json"

# ============================================================================
# JSON File Loading
# ============================================================================


def _load_json(path: pathlib.Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {path.name}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc


# ============================================================================
# Tracking Rules
# ============================================================================


def load_tracking_rules(path: str | pathlib.Path | None = None) -> tracking.TrackingRules:
    """Load and validate a tracking rule file.

    Args:
        path: Rule file to read.  ``None`` selects the bundled rules.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        pydantic.ValidationError: If the JSON does not match the
            rule schema.
    """
    rules_path = pathlib.Path(path) if path else BUNDLED_RULES_FILE
    raw = _load_json(rules_path)
    try:
        rules = tracking.TrackingRules.model_validate(raw)
    except pydantic.ValidationError:
        log.error("Invalid tracking rules file", {"path": str(rules_path)})
        raise
    log.debug("Loaded tracking rules", {
        "path": str(rules_path),
        "fragments": len(rules.fragments),
        "structural": len(rules.structural),
    })
    return rules


_tracking_rules_cache: dict[str, tracking.TrackingRules] = {}


def get_tracking_rules(path: str | pathlib.Path | None = None) -> tracking.TrackingRules:
    """Get a tracking rule set by path (lazy loaded and cached)."""
    key = str(path) if path else ""
    if key not in _tracking_rules_cache:
        _tracking_rules_cache[key] = load_tracking_rules(path)
    return _tracking_rules_cache[key]


def clear_cache() -> None:
    """Forget every loaded rule set."""
    _tracking_rules_cache.clear()
