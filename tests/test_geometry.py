import math

import numpy as np
import pandas as pd
import pytest
from shapely.geometry import Point

from data.geometry import add_distance, polygon_records, scale_radius, study_area, to_geodataframe


def haversine_m(lat1, lon1, lat2, lon2):
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 6371000.0 * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def test_to_geodataframe(points, geo_points):
    assert geo_points.crs.to_epsg() == 4326
    assert len(geo_points) == len(points)
    first = geo_points.geometry.iloc[0]
    assert first.x == pytest.approx(points.loc[0, "lon"])
    assert first.y == pytest.approx(points.loc[0, "lat"])
    # Input frame untouched
    assert "geometry" not in points.columns


def test_add_distance_keeps_restaurants_nearest_first(restaurants):
    assert len(restaurants) == 5
    assert set(restaurants["category"]) == {"restaurant"}
    assert restaurants["distance_m"].is_monotonic_increasing
    assert (restaurants["distance_m"] > 0).all()


def test_add_distance_matches_great_circle(restaurants, reference):
    for row in restaurants.itertuples():
        expected = haversine_m(reference["lat"], reference["lon"], row.lat, row.lon)
        assert row.distance_m == pytest.approx(expected, rel=5e-3)


def test_add_distance_from_a_point_on_the_data(geo_points):
    diner = geo_points[geo_points["name"] == "Maple Street Diner"].iloc[0]
    result = add_distance(geo_points, Point(diner["lon"], diner["lat"]))
    assert result.iloc[0]["name"] == "Maple Street Diner"
    assert result.iloc[0]["distance_m"] == pytest.approx(0.0, abs=1e-6)


def test_add_distance_empty_category(geo_points, reference):
    result = add_distance(geo_points, reference, category="park")
    assert len(result) == 1
    empty = add_distance(geo_points[geo_points["category"] != "park"], reference, category="park")
    assert empty.empty
    assert "distance_m" in empty.columns


def test_study_area_covers_points(geo_points):
    area = study_area(geo_points, buffer_m=200)
    assert len(area) == 1
    assert area.crs.to_epsg() == 4326
    polygon = area.geometry.iloc[0]
    assert polygon.geom_type == "Polygon"
    assert all(polygon.contains(p) for p in geo_points.geometry)


def test_polygon_records(geo_points):
    records = polygon_records(study_area(geo_points))
    assert list(records.columns) == ["name", "coordinates"]
    ring = records.loc[0, "coordinates"]
    assert ring[0] == ring[-1]
    assert all(len(pair) == 2 for pair in ring)


def test_scale_radius_series_keeps_index():
    distances = pd.Series([0.0, 1000.0, 100000.0], index=["a", "b", "c"])
    radii = scale_radius(distances, scale=0.1, min_radius=10, max_radius=500)
    assert list(radii.index) == ["a", "b", "c"]
    assert radii["a"] == 10
    assert radii["b"] == pytest.approx(110)
    assert radii["c"] == 500


def test_scale_radius_list_returns_array():
    radii = scale_radius([0, 200], scale=1.0, min_radius=5, max_radius=1000)
    assert isinstance(radii, np.ndarray)
    assert radii.tolist() == [5.0, 205.0]
