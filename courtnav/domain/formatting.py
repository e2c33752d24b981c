"""Human-readable distance / duration strings shown in the route-info panel."""

from __future__ import annotations

import math


def format_distance(meters: float) -> str:
    """``"850 m"`` under one kilometre, ``"1.6 km"`` otherwise."""
    if meters < 1000:
        return f"{math.floor(meters + 0.5)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    """``"12 min"`` under an hour, ``"3 hr 39 min"`` otherwise."""
    minutes = math.ceil(seconds / 60)
    if minutes < 60:
        return f"{minutes} min"
    return f"{minutes // 60} hr {minutes % 60} min"
