from __future__ import annotations

import math
from typing import List, Sequence

from route_terrain.course_model import Segment
from route_terrain.units import DistanceUnit, UnitLike, unit_label

# how far into the route the opening terrain is still worth describing
MAX_OPENING_SEGMENT_INDEX = 3


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _is_flat_or_gentle(label: str) -> bool:
    return "flat" in label or "Gentle" in label


def varied_terrain_summary(total_distance: float, unit: UnitLike = DistanceUnit.MILES) -> str:
    return f"This {total_distance:.1f}-{unit_label(unit)} route has varied terrain."


def generate_summary(
    segments: Sequence[Segment],
    total_distance: float,
    unit: UnitLike = DistanceUnit.MILES,
) -> str:
    """
    Short narrative of the route.

    Only two things are reported:
      - how long the opening terrain lasts, when the route opens flat or
        gently and changes within the first few segments
      - every place where climbing starts after a non-climbing segment

    Falls back to a generic "varied terrain" sentence when neither applies.
    """
    if not segments:
        return varied_terrain_summary(total_distance, unit)

    parts: List[str] = []

    initial_terrain = segments[0].terrain_label
    current_terrain = initial_terrain
    seen_change = False

    for i in range(1, len(segments)):
        seg = segments[i]
        label = seg.terrain_label

        if label != current_terrain:
            if not seen_change and i <= MAX_OPENING_SEGMENT_INDEX and _is_flat_or_gentle(initial_terrain):
                n = _round_half_up(seg.start_distance)
                parts.append(
                    f"The first {n} {unit_label(unit, plural=n != 1)} "
                    f"will be {initial_terrain.lower()}"
                )
            seen_change = True
            current_terrain = label

        if "climb" in label and "climb" not in segments[i - 1].terrain_label:
            parts.append(
                f"Expect elevation gain starting at {unit_label(unit)} "
                f"{_round_half_up(seg.start_distance)}"
            )

    if not parts:
        return varied_terrain_summary(total_distance, unit)

    return ". ".join(parts) + "."
