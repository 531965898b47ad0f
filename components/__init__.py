# Components module
from .inputs import init_input_state, collect_inputs, render_input
from .panels import render_main, render_title
from .sidebar import render_sidebar

__all__ = [
    "init_input_state",
    "collect_inputs",
    "render_input",
    "render_main",
    "render_title",
    "render_sidebar",
]
