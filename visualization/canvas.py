"""
Immutable map canvas built up one layer at a time.

Every add_* method returns a new MapCanvas, so a map reads as a chain:

    canvas = (
        blank_canvas()
        .add_tiles()
        .add_polygons(area, label="name")
        .add_circle_markers(restaurants, radius_by="distance_m", color_by="category")
        .add_markers(office, label="name")
    )
    deck = canvas.to_deck()
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import pandas as pd
import pydeck as pdk
from pydeck.data_utils import compute_view

from config.settings import settings
from utils.logger import get_logger
from .layers import create_layer
from .map_view import get_initial_view_state, get_tooltip_config, view_state_dict

logger = get_logger("visualization.canvas")


@dataclass(frozen=True)
class TileSource:
    """A named basemap, resolved to pydeck's provider/style pair."""

    name: str
    map_provider: str
    map_style: str


def resolve_tile_provider(name: str) -> TileSource:
    """
    Look up a tile provider by name.

    Raises:
        KeyError: For a provider missing from the registry
        ValueError: When the provider needs an API key that is not configured
    """
    try:
        map_provider, map_style = settings.tiles.providers[name]
    except KeyError:
        raise KeyError(
            f"Unknown tile provider {name!r}, known providers: {sorted(settings.tiles.providers)}"
        ) from None

    if map_provider != "carto" and not settings.tiles.api_keys.get(map_provider):
        raise ValueError(f"Tile provider {name!r} needs an API key for {map_provider!r}")

    return TileSource(name=name, map_provider=map_provider, map_style=map_style)


def available_tile_providers() -> List[str]:
    """Provider names usable with the configured API keys."""
    return [
        name
        for name, (map_provider, _) in settings.tiles.providers.items()
        if map_provider == "carto" or settings.tiles.api_keys.get(map_provider)
    ]


@dataclass(frozen=True)
class MapCanvas:
    """A map under construction: view, tile sources and data layers."""

    view: Dict = field(default_factory=lambda: view_state_dict(get_initial_view_state()))
    tiles: Tuple[TileSource, ...] = ()
    layers: Tuple[pdk.Layer, ...] = ()
    labelled: bool = False

    # -- tiles -------------------------------------------------------------

    def add_tiles(self) -> "MapCanvas":
        """Add the default base tiles."""
        return self.add_provider_tiles(settings.tiles.base_provider)

    def add_provider_tiles(self, provider: str) -> "MapCanvas":
        """
        Add tiles from a named provider.

        Tile sources stack in call order and the last one is drawn.
        """
        source = resolve_tile_provider(provider)
        logger.debug(f"Tiles: {source.name} ({source.map_provider}/{source.map_style})")
        return replace(self, tiles=self.tiles + (source,))

    # -- data layers ---------------------------------------------------------

    def add_layer(self, layer: pdk.Layer, labelled: bool = False) -> "MapCanvas":
        """Add a prebuilt pydeck layer."""
        logger.debug(f"Layer {len(self.layers) + 1}: {layer.type}")
        return replace(
            self,
            layers=self.layers + (layer,),
            labelled=self.labelled or labelled,
        )

    def _add(self, layer_type: str, data: pd.DataFrame, label: Optional[str], **kwargs) -> "MapCanvas":
        layer = create_layer(layer_type, data, label=label, **kwargs)
        return self.add_layer(layer, labelled=bool(label) and not data.empty)

    def add_markers(
        self,
        data: pd.DataFrame,
        color_by: Optional[str] = None,
        label: Optional[str] = None,
        **kwargs,
    ) -> "MapCanvas":
        """Add pin markers, optionally colored by a category column."""
        kwargs.setdefault("size", settings.map.marker_size)
        return self._add("marker", data, label, color_by=color_by, **kwargs)

    def add_circle_markers(
        self,
        data: pd.DataFrame,
        radius: Optional[float] = None,
        radius_by: Optional[str] = None,
        radius_scale: Optional[float] = None,
        color_by: Optional[str] = None,
        label: Optional[str] = None,
        **kwargs,
    ) -> "MapCanvas":
        """Add circle markers with a fixed radius or one scaled from a column."""
        return self._add(
            "circle",
            data,
            label,
            radius=radius,
            radius_by=radius_by,
            radius_scale=radius_scale,
            color_by=color_by,
            **kwargs,
        )

    def add_polygons(
        self,
        data: pd.DataFrame,
        label: Optional[str] = None,
        **kwargs,
    ) -> "MapCanvas":
        """Add polygons from a GeoDataFrame."""
        return self._add("polygon", data, label, **kwargs)

    def add_labels(self, data: pd.DataFrame, text_column: str = "name", **kwargs) -> "MapCanvas":
        """Add text labels next to points."""
        layer = create_layer("text", data, text_column=text_column, **kwargs)
        return self.add_layer(layer)

    # -- view ----------------------------------------------------------------

    def set_view(self, **view) -> "MapCanvas":
        """Override view fields (latitude, longitude, zoom, pitch, bearing)."""
        unknown = set(view) - set(self.view)
        if unknown:
            raise ValueError(f"Unknown view fields: {sorted(unknown)}")
        return replace(self, view={**self.view, **view})

    def fit_bounds(self, data: pd.DataFrame, view_proportion: float = 1) -> "MapCanvas":
        """Center and zoom the view so every point of data is visible."""
        if data.empty:
            return self
        if len(data) == 1:
            row = data.iloc[0]
            return self.set_view(latitude=float(row["lat"]), longitude=float(row["lon"]))

        points = data[["lon", "lat"]].values.tolist()
        fitted = compute_view(points, view_proportion=view_proportion)
        return self.set_view(
            latitude=float(fitted.latitude),
            longitude=float(fitted.longitude),
            zoom=float(fitted.zoom),
        )

    # -- composition ---------------------------------------------------------

    def pipe(self, func: Callable[..., "MapCanvas"], *args, **kwargs) -> "MapCanvas":
        """Apply func(canvas, *args, **kwargs), which must return a canvas."""
        result = func(self, *args, **kwargs)
        if not isinstance(result, MapCanvas):
            raise TypeError(
                f"{getattr(func, '__name__', func)!r} returned {type(result).__name__}, expected MapCanvas"
            )
        return result

    # -- output --------------------------------------------------------------

    @property
    def tile_source(self) -> Optional[TileSource]:
        """The tile source that gets drawn (the most recently added)."""
        return self.tiles[-1] if self.tiles else None

    def to_deck(self) -> pdk.Deck:
        """Build the pydeck Deck for this canvas."""
        source = self.tile_source
        if len(self.tiles) > 1:
            logger.debug(
                f"{len(self.tiles)} tile sources stacked, drawing {source.name}"
            )

        api_keys = {k: v for k, v in settings.tiles.api_keys.items() if v}
        return pdk.Deck(
            layers=list(self.layers),
            initial_view_state=pdk.ViewState(**self.view),
            map_provider=source.map_provider if source else None,
            map_style=source.map_style if source else None,
            api_keys=api_keys,
            tooltip=get_tooltip_config(self.labelled) or False,
        )

    def to_html(self, path: str) -> str:
        """
        Write the canvas as a standalone HTML page.

        Returns:
            Path of the written file
        """
        written = self.to_deck().to_html(
            str(path), open_browser=False, notebook_display=False
        )
        logger.info(f"Wrote map with {len(self.layers)} layers to {written}")
        return written


def blank_canvas(
    center: Optional[Tuple[float, float]] = None,
    zoom: Optional[float] = None,
) -> MapCanvas:
    """
    A canvas with no tiles and no layers.

    Args:
        center: (lat, lon) of the view; defaults to settings
        zoom: Zoom level; defaults to settings
    """
    lat, lon = center if center is not None else (None, None)
    view = get_initial_view_state(center_lat=lat, center_lon=lon, zoom=zoom)
    return MapCanvas(view=view_state_dict(view))


def compose(canvas: MapCanvas, steps: Iterable[Callable[[MapCanvas], MapCanvas]]) -> MapCanvas:
    """
    Apply layer operations left to right.

    Args:
        canvas: Starting canvas
        steps: Callables taking and returning a canvas, e.g.
            ``lambda c: c.add_markers(df)`` or
            ``functools.partial(MapCanvas.add_provider_tiles, provider="CartoDB.Positron")``

    Returns:
        The final canvas
    """
    for step in steps:
        canvas = canvas.pipe(step)
    logger.info(
        f"Composed map: {len(canvas.tiles)} tile source(s), {len(canvas.layers)} layer(s)"
    )
    return canvas

