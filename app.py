"""
Shiny-style training dashboard on the iris data.
Run with: streamlit run app.py
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from dashboard import (
    OutputTable,
    fluid_page,
    main_panel,
    multiselect_input,
    plot_output,
    row,
    select_input,
    sidebar_panel,
    slider_input,
    table_output,
    text,
)
from dashboard.runtime import run_page
from data.datasets import load_iris_frame, numeric_columns
from visualization.plots import scatter_by_group

IRIS = load_iris_frame()
SPECIES = list(IRIS["Species"].cat.categories)
MEASUREMENTS = numeric_columns(IRIS)

outputs = OutputTable(name="iris")


def selected_iris():
    """Rows of the species picked in the sidebar."""
    return IRIS[IRIS["Species"].isin(outputs.input["species"])]


@outputs.render_table("irisTable")
def iris_table():
    return selected_iris().reset_index(drop=True)


@outputs.render_plot("irisPlot")
def iris_plot():
    return scatter_by_group(
        selected_iris(),
        x=outputs.input["x"],
        y=outputs.input["y"],
        color_by="Species",
        size=outputs.input["point_size"],
        alpha=0.7,
    )


page = fluid_page(
    settings.dashboard.page_title,
    sidebar=sidebar_panel(
        text("##### Inputs"),
        multiselect_input("species", "Species", SPECIES),
        select_input("x", "X axis", MEASUREMENTS, selected="Sepal.Length"),
        select_input("y", "Y axis", MEASUREMENTS, selected="Petal.Length"),
        slider_input("point_size", "Point size", 1, 6, 3, step=1),
    ),
    main=main_panel(
        # Plot on top, the data it came from underneath
        row(plot_output("irisPlot")),
        row(table_output("irisTable")),
    ),
)


def main():
    """Main application entry point."""
    run_page(
        page,
        outputs,
        page_icon=settings.dashboard.page_icon,
        subtitle="One plot output and one table output, re-rendered when an input they read changes.",
    )


if __name__ == "__main__":
    main()
