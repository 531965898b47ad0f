"""Geometry helpers built on GeoPandas: point geometries, distances, areas."""

from typing import Union

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import Point

from config.settings import settings
from utils.logger import get_logger

logger = get_logger("data.geometry")

# Lat/lon CRS used for everything that reaches the map
WGS84 = "EPSG:4326"


def to_geodataframe(df: pd.DataFrame) -> gpd.GeoDataFrame:
  """
  Bind each row's lon/lat into a point geometry.

  Args:
      df: Point DataFrame with lat and lon columns

  Returns:
      GeoDataFrame in EPSG:4326 (the input frame is left untouched)
  """
  return gpd.GeoDataFrame(
      df.copy(),
      geometry=gpd.points_from_xy(df["lon"], df["lat"]),
      crs=WGS84,
  )


def _reference_geometry(reference: Union[pd.Series, Point]) -> Point:
  if isinstance(reference, Point):
    return reference
  return Point(float(reference["lon"]), float(reference["lat"]))


def add_distance(
    gdf: gpd.GeoDataFrame,
    reference: Union[pd.Series, Point],
    category: str = None,
) -> gpd.GeoDataFrame:
  """
  Distance in meters from a reference point to every point of a category.

  Both sides are projected to the UTM zone covering the data before the
  distance is taken, so the result is in meters.

  Args:
      gdf: Point GeoDataFrame in EPSG:4326
      reference: Reference row (lat/lon) or shapely Point (lon, lat)
      category: Category to keep (defaults to the configured distance category)

  Returns:
      The category subset with a distance_m column, nearest first
  """
  category = category or settings.categories.distance_category
  subset = gdf[gdf["category"] == category]
  if subset.empty:
    logger.warning(f"No points in category {category!r}, nothing to measure")
    return subset.assign(distance_m=pd.Series(dtype=float))

  utm_crs = gdf.estimate_utm_crs()
  origin = gpd.GeoSeries([_reference_geometry(reference)], crs=WGS84).to_crs(utm_crs).iloc[0]
  distances = subset.to_crs(utm_crs).distance(origin)

  logger.debug(f"Measured {len(subset)} {category} points in {utm_crs.name}")
  result = subset.assign(distance_m=distances.values)
  return result.sort_values("distance_m").reset_index(drop=True)


def study_area(gdf: gpd.GeoDataFrame, buffer_m: float = None, name: str = "Study area") -> gpd.GeoDataFrame:
  """
  Polygon covering all points: their convex hull grown by buffer_m meters.

  Args:
      gdf: Point GeoDataFrame in EPSG:4326
      buffer_m: Buffer distance in meters
      name: Label stored with the polygon

  Returns:
      One-row GeoDataFrame in EPSG:4326
  """
  if buffer_m is None:
    buffer_m = settings.map.study_area_buffer_m

  if gdf.empty:
    return gpd.GeoDataFrame({"name": []}, geometry=[], crs=WGS84)

  utm_crs = gdf.estimate_utm_crs()
  hull = gdf.to_crs(utm_crs).geometry.union_all().convex_hull.buffer(buffer_m)
  area = gpd.GeoDataFrame({"name": [name]}, geometry=[hull], crs=utm_crs)
  return area.to_crs(WGS84)


def polygon_records(gdf: gpd.GeoDataFrame) -> pd.DataFrame:
  """
  Flatten polygon geometries into rows the polygon layer can draw.

  Multi-polygons are split into their parts. Each row keeps the
  non-geometry attributes plus a "coordinates" column holding the exterior
  ring as [[lon, lat], ...].
  """
  if gdf.empty:
    return pd.DataFrame(columns=[c for c in gdf.columns if c != gdf.geometry.name] + ["coordinates"])

  parts = gdf.to_crs(WGS84).explode(index_parts=False)
  parts = parts[parts.geometry.geom_type == "Polygon"]
  coordinates = [
      [[float(x), float(y)] for x, y in geom.exterior.coords]
      for geom in parts.geometry
  ]
  records = pd.DataFrame(parts.drop(columns=parts.geometry.name)).reset_index(drop=True)
  records["coordinates"] = coordinates
  return records


def scale_radius(
    distances,
    scale: float = None,
    min_radius: float = None,
    max_radius: float = None,
):
  """
  Scale a marker radius linearly with distance.

  radius = min_radius + distance * scale, clipped to [min_radius, max_radius].

  Args:
      distances: Distances in meters (Series, array or list)
      scale: Radius meters per meter of distance
      min_radius: Radius at zero distance
      max_radius: Upper bound

  Returns:
      Series when given a Series (same index), otherwise a numpy array
  """
  scale = settings.map.radius_scale if scale is None else scale
  min_radius = settings.map.min_radius if min_radius is None else min_radius
  max_radius = settings.map.max_radius if max_radius is None else max_radius

  values = np.clip(
      min_radius + np.asarray(distances, dtype=float) * scale,
      min_radius,
      max_radius,
  )
  if isinstance(distances, pd.Series):
    return pd.Series(values, index=distances.index, name="radius")
  return values
