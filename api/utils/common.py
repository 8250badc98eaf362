"""
Common utility functions used across services and routes.
"""

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() rounds to even)."""
    return int(math.floor(value + 0.5))


def format_duration(seconds: int) -> str:
    """Compact study-time label: "2h 5m", or "7m" under an hour."""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes = remainder // 60
    return f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"

