"""PyDeck layer factories for markers, circle markers, polygons and labels."""

from typing import Dict, List, Optional, Sequence, Union

import geopandas as gpd
import pandas as pd
import pydeck as pdk

from config.settings import settings
from data.geometry import polygon_records, scale_radius


# Built once at module load, avoiding repeated dictionary access
_CATEGORY_COLOR_MAP: Dict[str, List[int]] = {
    k: list(v) for k, v in settings.categories.colors.items()
}
_DEFAULT_COLOR: List[int] = [100, 100, 100, 200]
_DEFAULT_POINT_COLOR: List[int] = [255, 140, 0, 200]

# Leaflet's default marker pin
MARKER_ICON = {
    "url": "https://unpkg.com/leaflet@1.9.4/dist/images/marker-icon.png",
    "width": 25,
    "height": 41,
    "anchorY": 41,
    "mask": True,
}

LABEL_COLUMN = "label"


def _empty_layer(layer_type: str, **kwargs) -> pdk.Layer:
  return pdk.Layer(layer_type, data=[], get_position="[lon, lat]", **kwargs)


def _assign_colors(
    data: pd.DataFrame,
    color_by: Optional[str],
    color: Optional[Sequence[int]] = None,
) -> pd.DataFrame:
  """Add a color column, mapped from a category column or a fixed color."""
  if color_by and color_by in data.columns:
    mapped_colors = data[color_by].map(_CATEGORY_COLOR_MAP)
    colors = [c if isinstance(c, list) else _DEFAULT_COLOR for c in mapped_colors]
    return data.assign(color=colors)
  fill = list(color) if color is not None else _DEFAULT_POINT_COLOR
  return data.assign(color=[fill] * len(data))


def _assign_label(data: pd.DataFrame, label: Optional[str]) -> pd.DataFrame:
  """
  Add the tooltip label column.

  label is either a column name or a format string over the row's columns,
  e.g. "{name} ({distance_m:.0f} m)".
  """
  if not label:
    return data
  if label in data.columns:
    return data.assign(**{LABEL_COLUMN: data[label].astype(str)})
  texts = [label.format(**row) for row in data.to_dict("records")]
  return data.assign(**{LABEL_COLUMN: texts})


def _plain(data: pd.DataFrame) -> pd.DataFrame:
  """Drop shapely geometries, which pydeck cannot serialize."""
  if isinstance(data, gpd.GeoDataFrame):
    return pd.DataFrame(data.drop(columns=data.geometry.name))
  return data


def create_layer(layer_type: str, data: pd.DataFrame, **kwargs) -> pdk.Layer:
  """
  Factory function to create PyDeck layers.

  Args:
      layer_type: Type of layer ('marker', 'circle', 'polygon', 'text')
      data: DataFrame with lat/lon data (GeoDataFrame for polygons)
      **kwargs: Additional layer-specific parameters

  Returns:
      PyDeck Layer object

  Raises:
      ValueError: For an unknown layer type
  """
  layer_factories = {
      "marker": create_marker_layer,
      "circle": create_circle_layer,
      "polygon": create_polygon_layer,
      "text": create_text_layer,
  }

  factory = layer_factories.get(layer_type)
  if factory is None:
    raise ValueError(f"Unknown layer type {layer_type!r}, expected one of {list(layer_factories)}")
  return factory(data, **kwargs)


def create_marker_layer(
    data: pd.DataFrame,
    color_by: Optional[str] = None,
    color: Optional[Sequence[int]] = None,
    label: Optional[str] = None,
    size: int = 40,
    pickable: bool = True,
    layer_id: Optional[str] = None,
    **kwargs,
) -> pdk.Layer:
  """
  Create an IconLayer of map pins.

  Args:
      data: DataFrame with columns: lat, lon, plus any color_by/label columns
      color_by: Category column used for pin color
      color: Fixed RGBA color when color_by is not given
      label: Tooltip column name or format string
      size: Pin height in pixels
      pickable: Whether pins are hoverable
      layer_id: Deck layer id

  Returns:
      IconLayer
  """
  if data.empty:
    return _empty_layer("IconLayer", id=layer_id)

  data = _plain(data)
  data = _assign_colors(data, color_by, color)
  data = _assign_label(data, label)
  data = data.assign(icon_data=[MARKER_ICON] * len(data))

  return pdk.Layer(
      "IconLayer",
      data=data,
      id=layer_id,
      get_icon="icon_data",
      get_position="[lon, lat]",
      get_color="color",
      get_size=size,
      size_units="pixels",
      pickable=pickable,
  )


def create_circle_layer(
    data: pd.DataFrame,
    radius: Union[int, float] = None,
    radius_by: Optional[str] = None,
    radius_scale: Optional[float] = None,
    min_radius: Optional[float] = None,
    max_radius: Optional[float] = None,
    color_by: Optional[str] = None,
    color: Optional[Sequence[int]] = None,
    label: Optional[str] = None,
    opacity: float = None,
    stroked: bool = True,
    pickable: bool = True,
    layer_id: Optional[str] = None,
    **kwargs,
) -> pdk.Layer:
  """
  Create a ScatterplotLayer of circle markers.

  Args:
      data: DataFrame with columns: lat, lon, category (optional)
      radius: Fixed radius in meters
      radius_by: Numeric column the radius is scaled from (overrides radius)
      radius_scale: Meters of radius per unit of radius_by
      min_radius: Radius at zero
      max_radius: Largest radius drawn
      color_by: Category column used for fill color
      color: Fixed RGBA color when color_by is not given
      label: Tooltip column name or format string
      opacity: Layer opacity (0-1)
      stroked: Draw a white outline
      pickable: Whether circles are hoverable
      layer_id: Deck layer id

  Returns:
      ScatterplotLayer
  """
  if data.empty:
    return _empty_layer("ScatterplotLayer", id=layer_id)

  if opacity is None:
    opacity = settings.map.default_opacity

  data = _plain(data)
  data = _assign_colors(data, color_by, color)
  data = _assign_label(data, label)

  if radius_by:
    if radius_by not in data.columns:
      raise KeyError(f"Column {radius_by!r} not found for radius scaling")
    data = data.assign(
        radius=scale_radius(data[radius_by], radius_scale, min_radius, max_radius).values
    )
    get_radius = "radius"
  else:
    get_radius = radius if radius is not None else settings.map.circle_radius

  return pdk.Layer(
      "ScatterplotLayer",
      data=data,
      id=layer_id,
      get_position="[lon, lat]",
      get_fill_color="color",
      get_line_color=[255, 255, 255, 255],
      get_radius=get_radius,
      radius_min_pixels=3,
      line_width_min_pixels=1,
      stroked=stroked,
      filled=True,
      opacity=opacity,
      pickable=pickable,
      auto_highlight=True,
  )


def create_polygon_layer(
    data: gpd.GeoDataFrame,
    fill_color: Sequence[int] = (70, 130, 180, 60),
    line_color: Sequence[int] = (70, 130, 180, 220),
    line_width: int = 2,
    label: Optional[str] = None,
    opacity: float = None,
    pickable: bool = True,
    layer_id: Optional[str] = None,
    **kwargs,
) -> pdk.Layer:
  """
  Create a PolygonLayer from polygon geometries.

  Args:
      data: GeoDataFrame with polygon geometries
      fill_color: RGBA fill
      line_color: RGBA outline
      line_width: Outline width in pixels
      label: Tooltip column name or format string
      opacity: Layer opacity (0-1)
      pickable: Whether polygons are hoverable
      layer_id: Deck layer id

  Returns:
      PolygonLayer
  """
  if data.empty:
    return pdk.Layer("PolygonLayer", data=[], id=layer_id, get_polygon="coordinates")

  if opacity is None:
    opacity = settings.map.default_opacity

  records = _assign_label(polygon_records(data), label)

  return pdk.Layer(
      "PolygonLayer",
      data=records,
      id=layer_id,
      get_polygon="coordinates",
      get_fill_color=list(fill_color),
      get_line_color=list(line_color),
      line_width_min_pixels=line_width,
      stroked=True,
      filled=True,
      opacity=opacity,
      pickable=pickable,
  )


def create_text_layer(
    data: pd.DataFrame,
    text_column: str = "name",
    size: int = 14,
    color: Sequence[int] = (33, 33, 33, 255),
    layer_id: Optional[str] = None,
    **kwargs,
) -> pdk.Layer:
  """
  Create a TextLayer for labels.

  Args:
      data: DataFrame with lat, lon, and text column
      text_column: Column to use for text labels
      size: Font size
      color: RGBA text color
      layer_id: Deck layer id

  Returns:
      TextLayer
  """
  if data.empty or text_column not in data.columns:
    return _empty_layer("TextLayer", id=layer_id)

  data = _plain(data)

  return pdk.Layer(
      "TextLayer",
      data=data,
      id=layer_id,
      get_position="[lon, lat]",
      get_text=text_column,
      get_size=size,
      get_color=list(color),
      get_angle=0,
      get_text_anchor=pdk.types.String("middle"),
      get_alignment_baseline=pdk.types.String("top"),
      get_pixel_offset=[0, 8],
  )
