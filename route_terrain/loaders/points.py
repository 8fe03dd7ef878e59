from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from route_terrain.utils.geo import cumulative_distance_m, ensure_non_decreasing

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("lat", "lng", "elevation", "distance")


@dataclass(frozen=True)
class TrackPoint:
    latitude: float
    longitude: float
    elevation_m: float
    cumulative_distance_m: float


def _require_number(record: Mapping[str, Any], field: str, index: int) -> float:
    value = record.get(field)
    # bool is a Real subclass; a True elevation is still a bad payload
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(
            f"Invalid point data at index {index}: "
            f"'{field}' must be a number, got {type(value).__name__}"
        )
    return float(value)


def points_from_records(records: Iterable[Mapping[str, Any]]) -> List[TrackPoint]:
    """
    Validate and convert JSON-style point payloads.

    Each record needs numeric 'lat', 'lng', 'elevation' (m) and 'distance'
    (cumulative meters). Raises ValueError naming the first bad record.
    """
    out: List[TrackPoint] = []
    for i, rec in enumerate(records):
        if not isinstance(rec, Mapping):
            raise ValueError(
                f"Invalid point data at index {i}: expected a mapping, got {type(rec).__name__}"
            )
        lat, lng, elev, dist = (_require_number(rec, f, i) for f in RECORD_FIELDS)
        out.append(TrackPoint(lat, lng, elev, dist))

    logger.debug("Loaded %d points from records", len(out))
    return out


def points_from_latlng(
    coords: Iterable[Tuple[float, float, Optional[float]]],
) -> List[TrackPoint]:
    """
    Build points from (lat, lng, elevation) triples, computing cumulative
    distance with the haversine formula.

    Triples without a usable elevation are skipped, and distance is measured
    only between the points that are kept.
    """
    kept: List[Tuple[float, float, float]] = []
    skipped = 0
    for lat, lng, elev in coords:
        if elev is None or not np.isfinite(float(elev)):
            skipped += 1
            continue
        kept.append((float(lat), float(lng), float(elev)))

    if skipped:
        logger.warning("Skipped %d points without elevation", skipped)

    if not kept:
        return []

    lats = [p[0] for p in kept]
    lngs = [p[1] for p in kept]
    dist = cumulative_distance_m(lats, lngs)

    return [
        TrackPoint(lat, lng, elev, float(d))
        for (lat, lng, elev), d in zip(kept, dist)
    ]


def points_from_streams(
    latlng: Sequence[Sequence[float]],
    distance: Sequence[float],
    altitude: Sequence[float],
) -> List[TrackPoint]:
    """
    Zip activity stream arrays (latlng pairs, cumulative distance in m,
    altitude in m) into points. Streams of unequal length are cut to the
    shortest one.
    """
    n = min(len(latlng), len(distance), len(altitude))
    if n < max(len(latlng), len(distance), len(altitude)):
        logger.warning(
            "Stream lengths differ (latlng=%d, distance=%d, altitude=%d); using first %d samples",
            len(latlng), len(distance), len(altitude), n,
        )

    dist = ensure_non_decreasing([float(d) for d in distance[:n]])
    return [
        TrackPoint(
            float(latlng[i][0]),
            float(latlng[i][1]),
            float(altitude[i]),
            float(dist[i]),
        )
        for i in range(n)
    ]


def points_from_df(df: pd.DataFrame) -> List[TrackPoint]:
    """
    Convert a track DataFrame into points.

    Expects:
      - 'lat', 'lon'
      - 'elev_smooth' (preferred) or 'elev', in meters
      - 'cum_distance' in meters (computed from lat/lon when missing)
    """
    if df is None or df.empty:
        return []

    if "elev_smooth" in df.columns:
        elev_col = "elev_smooth"
    elif "elev" in df.columns:
        elev_col = "elev"
    else:
        raise ValueError("DataFrame needs an 'elev_smooth' or 'elev' column")

    lat = pd.to_numeric(df["lat"], errors="coerce").to_numpy(dtype=float)
    lon = pd.to_numeric(df["lon"], errors="coerce").to_numpy(dtype=float)
    elev = pd.to_numeric(df[elev_col], errors="coerce").to_numpy(dtype=float)

    if "cum_distance" in df.columns:
        dist = pd.to_numeric(df["cum_distance"], errors="coerce").to_numpy(dtype=float)
    else:
        dist = cumulative_distance_m(lat, lon)
    dist = ensure_non_decreasing(dist)

    return [
        TrackPoint(float(a), float(b), float(e), float(d))
        for a, b, e, d in zip(lat, lon, elev, dist)
    ]
