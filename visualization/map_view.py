"""Map view state, tooltips and Streamlit rendering of decks."""

from typing import Dict, Optional

import pydeck as pdk
import streamlit as st

from config.settings import settings


def get_initial_view_state(
    center_lat: Optional[float] = None,
    center_lon: Optional[float] = None,
    zoom: Optional[float] = None,
    pitch: Optional[int] = None,
    bearing: Optional[int] = None,
) -> pdk.ViewState:
    """
    Create initial view state for the map.

    Args:
        center_lat: Latitude of map center
        center_lon: Longitude of map center
        zoom: Initial zoom level
        pitch: Tilt angle (0-60)
        bearing: Rotation angle

    Returns:
        PyDeck ViewState object
    """
    return pdk.ViewState(
        latitude=settings.map.center_lat if center_lat is None else center_lat,
        longitude=settings.map.center_lon if center_lon is None else center_lon,
        zoom=settings.map.default_zoom if zoom is None else zoom,
        pitch=settings.map.default_pitch if pitch is None else pitch,
        bearing=settings.map.default_bearing if bearing is None else bearing,
    )


def view_state_dict(view_state: pdk.ViewState) -> Dict:
    """Plain dict of the fields a ViewState was built from."""
    return {
        "latitude": view_state.latitude,
        "longitude": view_state.longitude,
        "zoom": view_state.zoom,
        "pitch": view_state.pitch,
        "bearing": view_state.bearing,
    }


def get_tooltip_config(labelled: bool) -> Dict:
    """
    Get tooltip configuration for a deck.

    Args:
        labelled: Whether any layer carries a label column

    Returns:
        Tooltip configuration dictionary (empty when nothing is labelled)
    """
    if not labelled:
        return {}

    return {
        "html": """
            <div style="
                background: rgba(255, 255, 255, 0.95);
                padding: 8px 12px;
                border-radius: 6px;
                border: 1px solid rgba(0, 0, 0, 0.15);
                font-family: 'Inter', system-ui, sans-serif;
                font-size: 12px;
                color: #1f2937;
            ">{label}</div>
        """,
        "style": {
            "backgroundColor": "transparent",
            "color": "#1f2937",
        },
    }


def render_deck(deck: pdk.Deck, height: Optional[int] = None) -> pdk.Deck:
    """
    Render a PyDeck deck in Streamlit.

    Args:
        deck: Deck to draw
        height: Map height in pixels

    Returns:
        The deck, unchanged
    """
    st.pydeck_chart(deck, width="stretch", height=height or settings.map.height)
    return deck
