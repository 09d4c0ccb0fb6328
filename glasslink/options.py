"""Interpretation of boolean option strings."""

from __future__ import annotations

_TRUE_WORDS = frozenset({"1", "true", "yes", "on", "enable"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", "disable"})


def is_valid_bool(value: str | None) -> bool:
    """Tell whether ``value`` is a recognised boolean word, ignoring case."""
    if value is None:
        return False
    return value.lower() in _TRUE_WORDS | _FALSE_WORDS


def parse_bool(value: str) -> bool:
    """Return True for a recognised true word, False for anything else."""
    return value.lower() in _TRUE_WORDS