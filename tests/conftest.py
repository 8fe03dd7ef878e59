import pytest

from route_terrain.loaders.points import TrackPoint


# 5-mile route: flat, gentle climb, steeper climb, descent, flat.
# (distance m, elevation m)
MOCK_PROFILE = [
    (0, 100), (402, 101), (804, 102), (1207, 103), (1609, 104),
    (2011, 108), (2414, 112), (2816, 116), (3219, 120),
    (3621, 128), (4023, 138), (4426, 148), (4828, 158),
    (5230, 152), (5633, 146), (6035, 140), (6437, 134),
    (6840, 133), (7242, 132), (7645, 131), (8047, 130),
]


def make_points(profile):
    return [
        TrackPoint(37.7749 + i * 0.0001, -122.4194 - i * 0.0001, float(e), float(d))
        for i, (d, e) in enumerate(profile)
    ]


@pytest.fixture
def mock_route_points():
    return make_points(MOCK_PROFILE)


@pytest.fixture
def point_factory():
    return make_points
