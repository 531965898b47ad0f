import pydeck as pdk
import pytest
from matplotlib.figure import Figure

import app
import map_app


@pytest.fixture
def iris_inputs():
    return app.page.default_inputs()


@pytest.fixture
def map_inputs():
    return map_app.page.default_inputs()


def test_iris_layout_is_valid():
    app.page.validate(app.outputs)
    assert app.page.output_ids() == ["irisPlot", "irisTable"]


def test_iris_defaults(iris_inputs):
    assert iris_inputs["species"] == ["setosa", "versicolor", "virginica"]
    assert iris_inputs["x"] == "Sepal.Length"
    assert iris_inputs["y"] == "Petal.Length"
    assert iris_inputs["point_size"] == 3


def test_iris_table(iris_inputs):
    cache = {}
    table = app.outputs.evaluate("irisTable", iris_inputs, cache)
    assert len(table) == 150
    assert list(table.columns) == [
        "Sepal.Length", "Sepal.Width", "Petal.Length", "Petal.Width", "Species",
    ]

    filtered = app.outputs.evaluate("irisTable", {**iris_inputs, "species": ["setosa"]}, cache)
    assert len(filtered) == 50
    assert set(filtered["Species"]) == {"setosa"}


def test_iris_table_ignores_plot_inputs(iris_inputs):
    cache = {}
    first = app.outputs.evaluate("irisTable", iris_inputs, cache)
    again = app.outputs.evaluate("irisTable", {**iris_inputs, "point_size": 5}, cache)
    assert again is first


def test_iris_plot(iris_inputs):
    fig = app.outputs.evaluate("irisPlot", iris_inputs, {})
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_xlabel() == "Sepal.Length"
    assert ax.get_ylabel() == "Petal.Length"
    assert len(ax.collections) == 3


def test_map_layout_is_valid():
    map_app.page.validate(map_app.outputs)
    assert map_app.page.output_ids() == ["restaurantMap", "distanceTable"]


def test_restaurant_map(map_inputs):
    deck = map_app.outputs.evaluate("restaurantMap", map_inputs, {})
    assert isinstance(deck, pdk.Deck)
    assert [layer.type for layer in deck.layers] == [
        "PolygonLayer", "ScatterplotLayer", "IconLayer", "TextLayer",
    ]


def test_restaurant_map_without_extras(map_inputs):
    inputs = {**map_inputs, "show_area": False, "show_labels": False}
    deck = map_app.outputs.evaluate("restaurantMap", inputs, {})
    assert [layer.type for layer in deck.layers] == ["ScatterplotLayer", "IconLayer"]


def test_distance_table(map_inputs):
    table = map_app.outputs.evaluate("distanceTable", map_inputs, {})
    assert len(table) == 5
    assert table["distance_m"].is_monotonic_increasing
    assert (table["radius_m"] >= map_app.settings.map.min_radius).all()
    assert (table["radius_m"] <= map_app.settings.map.max_radius).all()


def test_distance_table_without_restaurants(map_inputs):
    inputs = {**map_inputs, "categories": ["office", "park"]}
    table = map_app.outputs.evaluate("distanceTable", inputs, {})
    assert table.empty
    assert "distance_m" in table.columns

    deck = map_app.outputs.evaluate("restaurantMap", inputs, {})
    assert isinstance(deck, pdk.Deck)


def test_distance_label_keeps_braces_in_reference_name():
    template = map_app.distance_label("Café {Main} Office")
    assert template.format(name="Harbor Grill", distance_m=1234.4) == (
        "Harbor Grill: 1234 m from Café {Main} Office"
    )
