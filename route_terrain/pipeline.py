from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from route_terrain.course_model import Segment, TerrainBands, build_segments, check_increment
from route_terrain.elevation import accumulate_elevation
from route_terrain.loaders.points import TrackPoint
from route_terrain.summary import generate_summary
from route_terrain.units import (
    SEGMENT_INCREMENTS,
    DistanceUnit,
    UnitLike,
    parse_unit,
    to_display_distance,
    to_feet,
)

logger = logging.getLogger(__name__)

NO_ROUTE_DATA_SUMMARY = "No route data available"

UNIT_ENV_VAR = "ROUTE_TERRAIN_UNIT"
INCREMENT_ENV_VAR = "ROUTE_TERRAIN_INCREMENT"


def parse_increment(value) -> float:
    """Parse a user-supplied bucket width; only the offered widths are accepted."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid segment increment: {value!r}")

    try:
        increment = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid segment increment: {value!r}") from None

    if increment not in SEGMENT_INCREMENTS:
        raise ValueError(
            f"Unsupported segment increment: {increment} (expected one of {list(SEGMENT_INCREMENTS)})"
        )
    return increment


@dataclass
class AnalysisConfig:
    unit: DistanceUnit = DistanceUnit.MILES
    increment: float = 1.0

    # terrain label thresholds
    bands: TerrainBands = TerrainBands()

    # log each run at INFO instead of DEBUG
    verbose: bool = False

    def __post_init__(self) -> None:
        self.unit = parse_unit(self.unit)
        self.increment = parse_increment(self.increment)

    @classmethod
    def from_env(cls, **overrides) -> "AnalysisConfig":
        """
        Build a config from ROUTE_TERRAIN_UNIT / ROUTE_TERRAIN_INCREMENT
        (a .env file is honored). Keyword overrides win over the environment.
        """
        load_dotenv()

        kwargs = {}
        unit = os.getenv(UNIT_ENV_VAR)
        if unit:
            kwargs["unit"] = unit.strip().lower()
        increment = os.getenv(INCREMENT_ENV_VAR)
        if increment:
            kwargs["increment"] = increment.strip()

        kwargs.update(overrides)
        return cls(**kwargs)


@dataclass(frozen=True)
class RouteAnalysis:
    total_distance: float
    total_elevation_gain_ft: float
    total_elevation_loss_ft: float
    segments: List[Segment]
    summary: str
    unit: DistanceUnit
    increment: float

    # carried so a unit/increment change can be recomputed without reloading
    points: Optional[List[TrackPoint]] = None

    # free-form advisory text attached after analysis
    insights: Optional[str] = None


def analyze_route(
    points: Optional[Sequence[TrackPoint]],
    unit: UnitLike = DistanceUnit.MILES,
    increment: float = 1.0,
    bands: TerrainBands = TerrainBands(),
) -> RouteAnalysis:
    """
    Full terrain analysis of one route.

    Empty or missing input is not an error: it yields a zeroed analysis with
    summary "No route data available"; an invalid increment still raises
    ValueError. The result records the unit and
    increment it was computed with; calling again with the same arguments
    gives the same result.
    """
    unit = parse_unit(unit)
    check_increment(increment)

    if not points:
        return RouteAnalysis(
            total_distance=0.0,
            total_elevation_gain_ft=0.0,
            total_elevation_loss_ft=0.0,
            segments=[],
            summary=NO_ROUTE_DATA_SUMMARY,
            unit=unit,
            increment=increment,
        )

    points = list(points)

    total_distance = to_display_distance(points[-1].cumulative_distance_m, unit)
    gain_m, loss_m = accumulate_elevation([p.elevation_m for p in points])

    segments = build_segments(points, total_distance, increment=increment, unit=unit, bands=bands)
    summary = generate_summary(segments, total_distance, unit)

    return RouteAnalysis(
        total_distance=total_distance,
        total_elevation_gain_ft=to_feet(gain_m),
        total_elevation_loss_ft=to_feet(loss_m),
        segments=segments,
        summary=summary,
        unit=unit,
        increment=increment,
        points=points,
    )


def run_pipeline(cfg: AnalysisConfig, points: Optional[Sequence[TrackPoint]]) -> RouteAnalysis:
    """Analyze with the unit/increment/bands from a config."""
    level = logging.INFO if cfg.verbose else logging.DEBUG
    logger.log(
        level,
        "Analyzing %d points (unit=%s, increment=%s)",
        len(points) if points else 0,
        cfg.unit.value,
        cfg.increment,
    )

    analysis = analyze_route(points, unit=cfg.unit, increment=cfg.increment, bands=cfg.bands)

    logger.log(
        level,
        "Route %.2f %s, %d segments, +%.0f ft / -%.0f ft",
        analysis.total_distance,
        analysis.unit.value,
        len(analysis.segments),
        analysis.total_elevation_gain_ft,
        analysis.total_elevation_loss_ft,
    )
    return analysis


# -------------------------
# Cached results
# -------------------------
def needs_reanalysis(analysis: RouteAnalysis, unit: UnitLike, increment: float) -> bool:
    """True when `analysis` was computed for a different unit or increment."""
    return analysis.unit is not parse_unit(unit) or analysis.increment != increment


def reanalyze(
    analysis: RouteAnalysis,
    unit: UnitLike,
    increment: float,
    bands: TerrainBands = TerrainBands(),
) -> RouteAnalysis:
    """
    Recompute a cached analysis for another unit/increment from the points it
    carries. Returns `analysis` unchanged when nothing differs. Attached
    insights are kept.
    """
    if not needs_reanalysis(analysis, unit, increment):
        return analysis

    logger.debug(
        "Recomputing analysis: %s/%s -> %s/%s",
        analysis.unit.value, analysis.increment, parse_unit(unit).value, increment,
    )
    fresh = analyze_route(analysis.points, unit=unit, increment=increment, bands=bands)
    if analysis.insights is not None:
        fresh = attach_insights(fresh, analysis.insights)
    return fresh


def attach_insights(analysis: RouteAnalysis, text: Optional[str]) -> RouteAnalysis:
    """Return a copy of `analysis` carrying free-form advisory text."""
    return replace(analysis, insights=text)
