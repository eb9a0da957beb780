"""
Cache key generation utilities for Schedule Kit.

This module provides functions to generate availability cache keys.
"""

from typing import Any, Optional

from utils.converters import to_date


def generate_cache_key(key, namespace=None, version=None):
    """
    Generate a standardized cache key.

    Args:
        key (str): Base cache key
        namespace (str): Optional namespace
        version (str): Optional version

    Returns:
        str: Formatted cache key
    """
    parts = []
    if namespace:
        parts.append(namespace)

    parts.append(str(key))

    if version:
        parts.append(f"v{version}")

    return ":".join(parts)


def availability_cache_key(target: Any, view: str = "day", namespace: Optional[str] = None) -> str:
    """
    Cache key of an availability response.

    Only the civil date of ``target`` is used, so any time on the same
    local day maps to the same key.

    Args:
        target: Date, datetime or ISO string
        view: 'day', 'week' or 'month'
        namespace: Optional namespace

    Returns:
        str: Key such as "availability:2025-01-01_day"

    Raises:
        ValueError: If ``target`` is not a date
    """
    day = to_date(target)
    if day is None:
        raise ValueError(f"Cannot build an availability cache key from {target!r}")
    return generate_cache_key(f"{day.isoformat()}_{view}", namespace=namespace or "availability")
