# Data module
from .points import (
    PointRecord,
    SAMPLE_POINTS,
    points_to_frame,
    validate_points,
    load_points,
    get_reference_point,
    filter_categories,
)
from .geometry import to_geodataframe, add_distance, study_area, polygon_records, scale_radius
from .datasets import load_iris_frame

__all__ = [
    "PointRecord",
    "SAMPLE_POINTS",
    "points_to_frame",
    "validate_points",
    "load_points",
    "get_reference_point",
    "filter_categories",
    "to_geodataframe",
    "add_distance",
    "study_area",
    "polygon_records",
    "scale_radius",
    "load_iris_frame",
]
