"""Point records used by the mapping tutorial."""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

import pandas as pd

from config.settings import settings
from utils.logger import get_logger

logger = get_logger("data.points")

POINT_COLUMNS = ["name", "lat", "lon", "category"]

# Column aliases accepted by load_points()
_COLUMN_ALIASES = {
    "latitude": "lat",
    "longitude": "lon",
    "lng": "lon",
}


@dataclass(frozen=True)
class PointRecord:
  """A named location with a category label."""
  name: str
  latitude: float
  longitude: float
  category: str

  def to_tuple(self):
    return (self.latitude, self.longitude)


SAMPLE_POINTS = [
    PointRecord("Training Office", 42.3011, -71.2169, "office"),
    PointRecord("Wells Avenue Deli", 42.3063, -71.2096, "restaurant"),
    PointRecord("Corner Noodle Bar", 42.2832, -71.2369, "restaurant"),
    PointRecord("Harbor Grill", 42.3295, -71.1935, "restaurant"),
    PointRecord("Maple Street Diner", 42.3370, -71.2092, "restaurant"),
    PointRecord("Little Italy Trattoria", 42.2795, -71.2405, "restaurant"),
    PointRecord("Riverside Park", 42.2942, -71.2146, "park"),
]


def points_to_frame(points: Iterable[PointRecord]) -> pd.DataFrame:
  """
  Convert point records into the flat frame used by the map layers.

  Args:
      points: Point records

  Returns:
      DataFrame with columns: name, lat, lon, category
  """
  rows = [asdict(p) for p in points]
  df = pd.DataFrame(rows, columns=["name", "latitude", "longitude", "category"])
  df = df.rename(columns={"latitude": "lat", "longitude": "lon"})
  return validate_points(df)


def validate_points(df: pd.DataFrame) -> pd.DataFrame:
  """
  Check the point frame and return it unchanged.

  Raises:
      ValueError: On missing columns, duplicate names, out-of-range
          coordinates or unknown categories
  """
  missing = [col for col in POINT_COLUMNS if col not in df.columns]
  if missing:
    raise ValueError(f"Point data is missing columns: {missing}")

  duplicated = df.loc[df["name"].duplicated(keep=False), "name"]
  if not duplicated.empty:
    names = sorted(set(duplicated))
    logger.error(f"Duplicate point names: {names}")
    raise ValueError(f"Point names must be unique, duplicated: {names}")

  # Blank or non-numeric coordinates count as out of range
  lat = pd.to_numeric(df["lat"], errors="coerce")
  lon = pd.to_numeric(df["lon"], errors="coerce")
  bad_lat = df[~lat.between(-90, 90)]
  bad_lon = df[~lon.between(-180, 180)]
  if not bad_lat.empty or not bad_lon.empty:
    names = sorted(set(bad_lat["name"]) | set(bad_lon["name"]))
    raise ValueError(f"Coordinates out of range for: {names}")

  unknown = df.loc[~df["category"].isin(settings.categories.categories), "category"]
  if not unknown.empty:
    raise ValueError(
        f"Unknown categories {sorted(set(unknown))}, "
        f"expected one of {settings.categories.categories}"
    )

  return df


def load_points(path) -> pd.DataFrame:
  """
  Load point records from a CSV file.

  The file needs a name and category column plus latitude/longitude
  (either spelled out or as lat/lon).

  Args:
      path: CSV file path or buffer

  Returns:
      Validated point DataFrame
  """
  df = pd.read_csv(path)
  df = df.rename(columns={k: v for k, v in _COLUMN_ALIASES.items() if k in df.columns})
  df = validate_points(df)
  df = df.astype({"lat": float, "lon": float})
  logger.info(f"Loaded {len(df)} points from {path}")
  return df[POINT_COLUMNS].reset_index(drop=True)


def get_reference_point(df: pd.DataFrame, name: Optional[str] = None) -> pd.Series:
  """
  Get the row used as the origin for distance calculations.

  Args:
      df: Point DataFrame
      name: Point name; defaults to the single reference-category row

  Returns:
      The matching row

  Raises:
      KeyError: If no matching point exists
  """
  if name is not None:
    match = df[df["name"] == name]
    if match.empty:
      raise KeyError(f"No point named {name!r}")
    return match.iloc[0]

  category = settings.categories.reference_category
  match = df[df["category"] == category]
  if match.empty:
    raise KeyError(f"No point with category {category!r} to use as reference")
  if len(match) > 1:
    logger.warning(
        f"{len(match)} points in category {category!r}, using {match.iloc[0]['name']!r}"
    )
  return match.iloc[0]


def filter_categories(df: pd.DataFrame, categories: Optional[Iterable[str]]) -> pd.DataFrame:
  """Keep only rows whose category is selected (None keeps everything)."""
  if categories is None:
    return df
  return df[df["category"].isin(list(categories))]
