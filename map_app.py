"""
Restaurant map tutorial: tiles, markers, distance-scaled circles and a study area.
Run with: streamlit run map_app.py
"""

import sys
from pathlib import Path
from typing import List

import pandas as pd

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from dashboard import (
    OutputTable,
    checkbox_input,
    fluid_page,
    main_panel,
    map_output,
    multiselect_input,
    row,
    select_input,
    sidebar_panel,
    slider_input,
    table_output,
    text,
)
from dashboard.runtime import run_page
from data.geometry import add_distance, scale_radius, study_area, to_geodataframe
from data.points import SAMPLE_POINTS, filter_categories, get_reference_point, points_to_frame
from visualization.canvas import MapCanvas, available_tile_providers, blank_canvas, compose

POINTS = points_to_frame(SAMPLE_POINTS)
GEO_POINTS = to_geodataframe(POINTS)
REFERENCE = get_reference_point(POINTS)
RESTAURANTS = add_distance(GEO_POINTS, REFERENCE)
STUDY_AREA = study_area(GEO_POINTS)


def distance_label(reference_name: str) -> str:
    """Tooltip template for the distance circles, with the name taken literally."""
    escaped = reference_name.replace("{", "{{").replace("}", "}}")
    return "{name}: {distance_m:.0f} m from " + escaped


DISTANCE_LABEL = distance_label(REFERENCE["name"])
POINT_LABEL = "{name} ({category})"


def build_restaurant_map(
    provider: str,
    categories: List[str],
    radius_scale: float = None,
    show_area: bool = True,
    show_labels: bool = True,
) -> MapCanvas:
    """
    Compose the tutorial map.

    Args:
        provider: Tile provider drawn over the base tiles
        categories: Point categories to show
        radius_scale: Circle radius meters per meter of distance
        show_area: Draw the study area polygon
        show_labels: Draw point names

    Returns:
        The composed canvas
    """
    visible = filter_categories(POINTS, categories)
    restaurants = filter_categories(RESTAURANTS, categories)
    others = visible[visible["category"] != settings.categories.distance_category]

    steps = [
        lambda c: c.add_tiles(),
        lambda c: c.add_provider_tiles(provider),
    ]
    if show_area:
        steps.append(lambda c: c.add_polygons(STUDY_AREA, label="name"))
    steps += [
        lambda c: c.add_circle_markers(
            restaurants,
            radius_by="distance_m",
            radius_scale=radius_scale,
            color_by="category",
            label=DISTANCE_LABEL,
        ),
        lambda c: c.add_markers(others, color_by="category", label=POINT_LABEL),
    ]
    if show_labels:
        steps.append(lambda c: c.add_labels(visible, text_column="name"))
    steps.append(lambda c: c.fit_bounds(visible))

    return compose(blank_canvas(), steps)


def distance_table(categories: List[str], radius_scale: float = None) -> pd.DataFrame:
    """Restaurants with their distance to the reference point and circle radius."""
    restaurants = filter_categories(RESTAURANTS, categories)
    table = pd.DataFrame(restaurants[["name", "category", "lat", "lon", "distance_m"]])
    table["radius_m"] = scale_radius(table["distance_m"], radius_scale).round(0)
    table["distance_m"] = table["distance_m"].round(0)
    return table.reset_index(drop=True)


outputs = OutputTable(name="restaurants")


@outputs.render_map("restaurantMap")
def restaurant_map():
    canvas = build_restaurant_map(
        provider=outputs.input["provider"],
        categories=outputs.input["categories"],
        radius_scale=outputs.input["radius_scale"],
        show_area=outputs.input["show_area"],
        show_labels=outputs.input["show_labels"],
    )
    return canvas.to_deck()


@outputs.render_table("distanceTable")
def restaurant_distances():
    return distance_table(outputs.input["categories"], outputs.input["radius_scale"])


page = fluid_page(
    settings.dashboard.map_page_title,
    sidebar=sidebar_panel(
        text("##### Tiles"),
        select_input(
            "provider",
            "Tile provider",
            available_tile_providers(),
            selected=settings.map.default_tile_provider,
        ),
        text("##### Layers"),
        multiselect_input("categories", "Categories", settings.categories.categories),
        slider_input(
            "radius_scale",
            "Radius per meter of distance",
            0.0,
            0.2,
            settings.map.radius_scale,
            step=0.01,
            help="Circle radius = minimum radius + distance × scale",
        ),
        checkbox_input("show_area", "Study area", value=True),
        checkbox_input("show_labels", "Point names", value=True),
    ),
    main=main_panel(
        row(map_output("restaurantMap", height=settings.map.height)),
        row(table_output("distanceTable")),
    ),
)


def main():
    """Main application entry point."""
    run_page(
        page,
        outputs,
        page_icon=settings.dashboard.map_page_icon,
        subtitle=f"Distances measured from {REFERENCE['name']}.",
    )


if __name__ == "__main__":
    main()
