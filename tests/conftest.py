import os

# Keep test runs from writing log files
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from data.geometry import add_distance, to_geodataframe
from data.points import SAMPLE_POINTS, get_reference_point, points_to_frame


@pytest.fixture
def points():
    return points_to_frame(SAMPLE_POINTS)


@pytest.fixture
def geo_points(points):
    return to_geodataframe(points)


@pytest.fixture
def reference(points):
    return get_reference_point(points)


@pytest.fixture
def restaurants(geo_points, reference):
    return add_distance(geo_points, reference)
