# Visualization module
from .layers import create_layer
from .canvas import MapCanvas, blank_canvas, compose
from .map_view import render_deck

__all__ = ["create_layer", "MapCanvas", "blank_canvas", "compose", "render_deck"]
