# route_terrain/utils/geo.py

from __future__ import annotations

from math import radians, sin, cos, sqrt, atan2
from typing import Sequence

import numpy as np

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two lat/lon points in meters."""
    phi1, phi2 = radians(lat1), radians(lat2)
    dphi = radians(lat2 - lat1)
    dlambda = radians(lon2 - lon1)

    a = sin(dphi / 2.0) ** 2 + cos(phi1) * cos(phi2) * sin(dlambda / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * atan2(sqrt(a), sqrt(1.0 - a))


def cumulative_distance_m(lats: Sequence[float], lons: Sequence[float]) -> np.ndarray:
    """Running along-track distance (m), starting at 0 for the first point."""
    n = len(lats)
    if n != len(lons):
        raise ValueError(f"lat/lon length mismatch: {n} vs {len(lons)}")

    steps = np.zeros(n, dtype=float)
    for i in range(1, n):
        steps[i] = haversine_m(lats[i - 1], lons[i - 1], lats[i], lons[i])
    return np.cumsum(steps)


def ensure_non_decreasing(distances: Sequence[float]) -> np.ndarray:
    """
    Carry the running maximum forward so a distance series never goes backwards.
    Repeated values are kept as-is (zero-length steps are legal).
    """
    x = np.asarray(distances, dtype=float)
    if x.size == 0:
        return x.copy()
    return np.maximum.accumulate(x)
