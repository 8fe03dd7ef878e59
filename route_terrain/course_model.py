# route_terrain/course_model.py

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from route_terrain.elevation import accumulate_elevation
from route_terrain.loaders.points import TrackPoint
from route_terrain.units import DistanceUnit, UnitLike, meters_per_unit, to_feet

logger = logging.getLogger(__name__)

FLAT = "Relatively flat"
GENTLE_CLIMB = "Gentle climb"
MODERATE_CLIMB = "Moderate climb"
STEEP_CLIMB = "Steep climb"
GENTLE_DESCENT = "Gentle descent"
MODERATE_DESCENT = "Moderate descent"
STEEP_DESCENT = "Steep descent"

TERRAIN_LABELS = (
    FLAT,
    GENTLE_CLIMB,
    MODERATE_CLIMB,
    STEEP_CLIMB,
    GENTLE_DESCENT,
    MODERATE_DESCENT,
    STEEP_DESCENT,
)


@dataclass(frozen=True)
class Segment:
    start_distance: float
    end_distance: float
    elevation_gain_ft: float
    elevation_loss_ft: float
    average_grade_pct: float
    terrain_label: str


@dataclass(frozen=True)
class TerrainBands:
    # grade magnitudes (%) where the next band starts
    flat_pct: float = 0.5
    moderate_pct: float = 1.0
    steep_pct: float = 3.0


# -------------------------
# Labeling
# -------------------------
def classify_grade(g: float, bands: TerrainBands = TerrainBands()) -> str:
    """
    Map an average grade (%) to a terrain label.

    Climb bands close on the lower bound (0.5 <= g < 1 is a gentle climb),
    descent bands close on the upper bound (-1 < g <= -0.5 is a gentle
    descent). Grades strictly inside (-flat, +flat) are flat.
    """
    if -bands.flat_pct < g < bands.flat_pct:
        return FLAT
    if g >= bands.steep_pct:
        return STEEP_CLIMB
    if g >= bands.moderate_pct:
        return MODERATE_CLIMB
    if g >= bands.flat_pct:
        return GENTLE_CLIMB
    if g <= -bands.steep_pct:
        return STEEP_DESCENT
    if g <= -bands.moderate_pct:
        return MODERATE_DESCENT
    if g <= -bands.flat_pct:
        return GENTLE_DESCENT
    # NaN
    return STEEP_DESCENT


# -------------------------
# Fixed-distance segments
# -------------------------
def check_increment(increment: float) -> None:
    # the bucket loop only terminates for a positive finite width
    if isinstance(increment, bool) or not (increment > 0) or not math.isfinite(increment):
        raise ValueError(f"increment must be a positive finite number, got {increment!r}")


def _segment_from_slice(
    elev: np.ndarray,
    dist_m: np.ndarray,
    start: float,
    end: float,
    bands: TerrainBands,
) -> Segment:
    gain_m, loss_m = accumulate_elevation(elev)

    span_m = float(dist_m[-1] - dist_m[0])
    rise_m = float(elev[-1] - elev[0])
    avg_grade = (rise_m / span_m) * 100.0 if span_m > 0 else 0.0

    return Segment(
        start_distance=start,
        end_distance=end,
        elevation_gain_ft=to_feet(gain_m),
        elevation_loss_ft=to_feet(loss_m),
        average_grade_pct=avg_grade,
        terrain_label=classify_grade(avg_grade, bands),
    )


def build_segments(
    points: Sequence[TrackPoint],
    total_distance: float,
    increment: float = 1.0,
    unit: UnitLike = DistanceUnit.MILES,
    bands: TerrainBands = TerrainBands(),
) -> List[Segment]:
    """
    Split the route into `increment`-wide buckets (display units) and
    summarize each one.

    Bucket i covers (i*increment, min((i+1)*increment, total_distance)];
    bucket 0 also takes a point sitting exactly at 0. Each bucket borrows the
    first point past its end so the elevation change across the boundary is
    counted; that point is not consumed and opens the next bucket.
    Buckets left with fewer than two points are dropped.

    A single cursor walks the points once across all buckets.
    """
    check_increment(increment)

    n = len(points)
    dist_m = np.fromiter((p.cumulative_distance_m for p in points), dtype=float, count=n)
    elev = np.fromiter((p.elevation_m for p in points), dtype=float, count=n)
    dist = (dist_m / meters_per_unit(unit)).tolist()

    segments: List[Segment] = []
    cursor = 0
    i = 0
    while i * increment < total_distance:
        start = i * increment
        end = min((i + 1) * increment, total_distance)

        # skip anything at or before the previous boundary
        if i == 0:
            while cursor < n and dist[cursor] < start:
                cursor += 1
        else:
            while cursor < n and dist[cursor] <= start:
                cursor += 1

        first = cursor
        while cursor < n and dist[cursor] <= end:
            cursor += 1

        # points[first:cursor] are inside; points[cursor] is the lookahead
        stop = cursor + 1 if cursor < n else cursor

        if stop - first < 2:
            logger.debug("Dropping bucket %d (%.3f-%.3f): %d point(s)", i, start, end, stop - first)
        else:
            segments.append(
                _segment_from_slice(elev[first:stop], dist_m[first:stop], start, end, bands)
            )
        i += 1

    logger.debug("Built %d segments from %d points over %d buckets", len(segments), n, i)
    return segments
