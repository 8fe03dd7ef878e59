# route_terrain/outputs/output_formatter.py

from __future__ import annotations
import pandas as pd
from typing import Dict, Any

from route_terrain.pipeline import RouteAnalysis
from route_terrain.units import unit_label


# -----------------------------
# Course overview
# -----------------------------

def make_course_overview_table(analysis: RouteAnalysis) -> pd.DataFrame:
    dist_col = f"distance_{unit_label(analysis.unit, plural=True)}"
    return pd.DataFrame(
        [
            {
                dist_col: analysis.total_distance,
                "total_gain_ft": analysis.total_elevation_gain_ft,
                "total_loss_ft": analysis.total_elevation_loss_ft,
                "num_segments": len(analysis.segments),
                "increment": analysis.increment,
            }
        ]
    )


# -----------------------------
# Segments
# -----------------------------

def make_segments_table(analysis: RouteAnalysis) -> pd.DataFrame:
    """One row per segment; distance columns are named after the unit."""
    units = unit_label(analysis.unit, plural=True)
    cols = [
        f"start_{units}",
        f"end_{units}",
        "gain_ft",
        "loss_ft",
        "avg_grade_pct",
        "terrain",
    ]

    rows = [
        {
            f"start_{units}": s.start_distance,
            f"end_{units}": s.end_distance,
            "gain_ft": s.elevation_gain_ft,
            "loss_ft": s.elevation_loss_ft,
            "avg_grade_pct": s.average_grade_pct,
            "terrain": s.terrain_label,
        }
        for s in analysis.segments
    ]
    return pd.DataFrame(rows, columns=cols)


# -----------------------------
# JSON payload
# -----------------------------

def analysis_to_dict(analysis: RouteAnalysis, include_points: bool = False) -> Dict[str, Any]:
    """
    JSON-ready payload (camelCase keys, distances in the analysis unit,
    elevations in feet).
    """
    out: Dict[str, Any] = {
        "totalDistance": analysis.total_distance,
        "totalElevationGain": analysis.total_elevation_gain_ft,
        "totalElevationLoss": analysis.total_elevation_loss_ft,
        "segments": [
            {
                "startDistance": s.start_distance,
                "endDistance": s.end_distance,
                "elevationGain": s.elevation_gain_ft,
                "elevationLoss": s.elevation_loss_ft,
                "avgGrade": s.average_grade_pct,
                "description": s.terrain_label,
            }
            for s in analysis.segments
        ],
        "summary": analysis.summary,
        "unit": analysis.unit.value,
        "increment": analysis.increment,
    }

    if include_points and analysis.points is not None:
        out["points"] = [
            {
                "lat": p.latitude,
                "lng": p.longitude,
                "elevation": p.elevation_m,
                "distance": p.cumulative_distance_m,
            }
            for p in analysis.points
        ]

    if analysis.insights is not None:
        out["aiCoachingInsights"] = analysis.insights

    return out
