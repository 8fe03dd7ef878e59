# route_terrain/units.py

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

FEET_PER_METER = 3.28084
METERS_PER_MILE = 1609.344
METERS_PER_KILOMETER = 1000.0

# Bucket widths (in display units) offered to users
SEGMENT_INCREMENTS: Tuple[float, ...] = (0.25, 0.5, 1.0)


class DistanceUnit(str, Enum):
    MILES = "miles"
    KILOMETERS = "kilometers"


UnitLike = Union[DistanceUnit, str]


def parse_unit(unit: UnitLike) -> DistanceUnit:
    """Accept the enum or its string value ("miles" / "kilometers")."""
    try:
        return DistanceUnit(unit)
    except ValueError:
        raise ValueError(
            f"Unknown distance unit: {unit!r} "
            f"(expected one of {[u.value for u in DistanceUnit]})"
        ) from None


def meters_per_unit(unit: UnitLike) -> float:
    if parse_unit(unit) is DistanceUnit.MILES:
        return METERS_PER_MILE
    return METERS_PER_KILOMETER


def to_display_distance(meters: float, unit: UnitLike = DistanceUnit.MILES) -> float:
    """Meters -> miles or kilometers. NaN passes straight through."""
    return meters / meters_per_unit(unit)


def to_feet(meters: float) -> float:
    return meters * FEET_PER_METER


def unit_label(unit: UnitLike, plural: bool = False) -> str:
    """Singular/plural unit word used in narrative text."""
    word = "mile" if parse_unit(unit) is DistanceUnit.MILES else "kilometer"
    return f"{word}s" if plural else word
