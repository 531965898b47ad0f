# Dashboard module
from .outputs import OutputTable, ReactiveInputs, RenderSpec
from .layout import (
    Page,
    fluid_page,
    sidebar_panel,
    main_panel,
    row,
    text,
    table_output,
    plot_output,
    map_output,
    select_input,
    multiselect_input,
    slider_input,
    checkbox_input,
)

__all__ = [
    "OutputTable",
    "ReactiveInputs",
    "RenderSpec",
    "Page",
    "fluid_page",
    "sidebar_panel",
    "main_panel",
    "row",
    "text",
    "table_output",
    "plot_output",
    "map_output",
    "select_input",
    "multiselect_input",
    "slider_input",
    "checkbox_input",
]
