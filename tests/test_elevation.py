import math

import numpy as np
import pytest

from route_terrain.elevation import accumulate_elevation


def test_accumulate_gain_and_loss():
    gain, loss = accumulate_elevation([100, 104, 120, 158, 134, 130])

    assert gain == pytest.approx(58.0)
    assert loss == pytest.approx(28.0)


def test_flat_profile_has_no_gain_or_loss():
    assert accumulate_elevation([50.0, 50.0, 50.0, 50.0]) == (0.0, 0.0)


def test_short_profiles():
    assert accumulate_elevation([]) == (0.0, 0.0)
    assert accumulate_elevation([123.0]) == (0.0, 0.0)


def test_results_are_non_negative():
    rng = np.random.default_rng(7)
    elev = 200 + rng.normal(0, 15, size=500).cumsum()

    gain, loss = accumulate_elevation(elev)

    assert gain >= 0
    assert loss >= 0
    # net change is recovered from the two sums
    assert gain - loss == pytest.approx(elev[-1] - elev[0], abs=1e-6)


def test_nan_poisons_loss_only():
    gain, loss = accumulate_elevation([10.0, 12.0, float("nan"), 15.0])

    assert gain == pytest.approx(2.0)
    assert math.isnan(loss)
