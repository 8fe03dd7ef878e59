from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def accumulate_elevation(elevations: Sequence[float]) -> Tuple[float, float]:
    """
    Sum positive and negative elevation deltas along an ordered profile.

    Args:
        elevations: Elevations in meters, in track order

    Returns:
        (gain_m, loss_m), both >= 0.

    A delta that is not strictly positive goes to the loss side as its
    absolute value, so a flat step adds 0 and a NaN step turns the loss
    total into NaN. Fewer than two samples give (0.0, 0.0).
    """
    elev = np.asarray(elevations, dtype=float)
    if elev.size < 2:
        return 0.0, 0.0

    diffs = np.diff(elev)
    rising = diffs > 0
    gain = float(diffs[rising].sum())
    loss = float(np.abs(diffs[~rising]).sum())
    return gain, loss
