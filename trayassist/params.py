"""Helpers for reading typed values out of tool parameter dictionaries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_required_string(params: Mapping[str, Any], key: str) -> str:
    """Return a non-empty string parameter, or raise ValueError."""
    value = params.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f'parameter "{key}" is required')
    return value


def get_optional_string(params: Mapping[str, Any], key: str, default: str) -> str:
    """Return a string parameter, or ``default`` when it is missing, empty or not a string."""
    value = params.get(key)
    if isinstance(value, str) and value:
        return value
    return default


def get_optional_int(params: Mapping[str, Any], key: str, default: int) -> int:
    """Return an integer parameter; floats are truncated, anything else gives ``default``."""
    value = params.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default


def get_optional_bool(params: Mapping[str, Any], key: str, default: bool) -> bool:
    """Return a boolean parameter, or ``default`` when it is missing or not a bool."""
    value = params.get(key)
    if isinstance(value, bool):
        return value
    return default