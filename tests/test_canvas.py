import functools

import pytest

from config.settings import settings
from data.geometry import study_area
from visualization.canvas import (
    MapCanvas,
    available_tile_providers,
    blank_canvas,
    compose,
    resolve_tile_provider,
)


def test_blank_canvas_defaults():
    canvas = blank_canvas()
    assert canvas.tiles == ()
    assert canvas.layers == ()
    assert canvas.view["latitude"] == settings.map.center_lat
    assert canvas.view["zoom"] == settings.map.default_zoom


def test_blank_canvas_center():
    canvas = blank_canvas(center=(10.0, 20.0), zoom=5)
    assert canvas.view["latitude"] == 10.0
    assert canvas.view["longitude"] == 20.0
    assert canvas.view["zoom"] == 5


def test_operations_return_new_canvas(points):
    base = blank_canvas()
    with_tiles = base.add_tiles()
    with_markers = with_tiles.add_markers(points)

    assert base.tiles == ()
    assert with_tiles.layers == ()
    assert len(with_markers.layers) == 1
    assert with_markers.tiles == with_tiles.tiles


def test_provider_tiles_stack_in_order():
    canvas = blank_canvas().add_tiles().add_provider_tiles("CartoDB.DarkMatter")
    assert [t.name for t in canvas.tiles] == [settings.tiles.base_provider, "CartoDB.DarkMatter"]
    assert canvas.tile_source.map_style == "dark"


def test_unknown_provider():
    with pytest.raises(KeyError, match="Nope.Tiles"):
        blank_canvas().add_provider_tiles("Nope.Tiles")


def test_provider_without_api_key(monkeypatch):
    monkeypatch.setitem(settings.tiles.api_keys, "mapbox", "")
    with pytest.raises(ValueError, match="API key"):
        resolve_tile_provider("Mapbox.Satellite")
    assert "Mapbox.Satellite" not in available_tile_providers()
    assert "CartoDB.Positron" in available_tile_providers()


def test_compose_applies_steps_left_to_right(points, restaurants, geo_points):
    canvas = compose(
        blank_canvas(),
        [
            MapCanvas.add_tiles,
            functools.partial(MapCanvas.add_provider_tiles, provider="CartoDB.Positron"),
            lambda c: c.add_polygons(study_area(geo_points), label="name"),
            lambda c: c.add_circle_markers(restaurants, radius_by="distance_m", color_by="category"),
            lambda c: c.add_markers(points, label="name"),
        ],
    )
    assert [layer.type for layer in canvas.layers] == ["PolygonLayer", "ScatterplotLayer", "IconLayer"]
    assert canvas.tile_source.name == "CartoDB.Positron"
    assert canvas.labelled


def test_pipe_rejects_non_canvas_result():
    with pytest.raises(TypeError):
        blank_canvas().pipe(lambda c: None)


def test_labels_on_empty_data_do_not_enable_tooltip(points):
    canvas = blank_canvas().add_markers(points.iloc[0:0], label="name")
    assert not canvas.labelled


def test_set_view_rejects_unknown_fields():
    with pytest.raises(ValueError):
        blank_canvas().set_view(altitude=3)


def test_fit_bounds(points):
    canvas = blank_canvas(center=(0.0, 0.0)).fit_bounds(points)
    assert points["lat"].min() <= canvas.view["latitude"] <= points["lat"].max()
    assert points["lon"].min() <= canvas.view["longitude"] <= points["lon"].max()

    single = blank_canvas().fit_bounds(points.iloc[[2]])
    assert single.view["latitude"] == points.iloc[2]["lat"]

    unchanged = blank_canvas()
    assert unchanged.fit_bounds(points.iloc[0:0]) is unchanged


def test_to_deck(points):
    deck = blank_canvas().add_tiles().add_markers(points, label="name").to_deck()
    assert deck.map_provider == "carto"
    assert len(deck.layers) == 1
    assert "IconLayer" in deck.to_json()


def test_blank_canvas_has_no_basemap():
    deck = blank_canvas().to_deck()
    assert deck.map_provider is None
    assert deck.layers == []


def test_to_html(tmp_path, points):
    target = tmp_path / "map.html"
    written = blank_canvas().add_tiles().add_markers(points).to_html(target)
    assert target.exists()
    assert str(written).endswith("map.html")
