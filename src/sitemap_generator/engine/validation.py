"""Validation of the optional ``<changefreq>`` and ``<priority>`` fields.

Values come straight from front matter, so they may be strings, numbers or
anything else YAML produces. Everything that is not recognisably valid is
rejected rather than coerced.
"""

import math
from typing import Any

from sitemap_generator.core.types import ChangeFrequency


def parse_change_frequency(value: Any) -> ChangeFrequency | None:
    """Return the matching ChangeFrequency, or None when the value is invalid.

    Examples:
        >>> parse_change_frequency("Weekly")
        <ChangeFrequency.WEEKLY: 'weekly'>
        >>> parse_change_frequency("fortnightly") is None
        True

    """
    if not isinstance(value, str):
        return None
    try:
        return ChangeFrequency(value.strip().lower())
    except ValueError:
        return None


def is_valid_change_frequency(value: Any) -> bool:
    return parse_change_frequency(value) is not None


def parse_priority(value: Any) -> float | None:
    """Return the priority as a float in [0.0, 1.0], or None when invalid.

    Examples:
        >>> parse_priority("0.5")
        0.5
        >>> parse_priority("1.1") is None
        True

    """
    if isinstance(value, bool):
        return None
    try:
        priority = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(priority) or not 0.0 <= priority <= 1.0:
        return None
    return priority


def is_valid_priority(value: Any) -> bool:
    return parse_priority(value) is not None
