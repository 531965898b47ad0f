"""Run a page and its outputs as a Streamlit app."""

from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple

import streamlit as st

from components.inputs import collect_inputs, init_input_state
from components.panels import render_main, render_title
from components.sidebar import render_sidebar
from config.settings import settings
from utils.logger import get_logger
from .layout import Page
from .outputs import OutputTable

logger = get_logger("dashboard.runtime")


def inject_custom_css():
    """Inject custom CSS for the panels."""
    st.markdown(
        """
        <style>
        @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap');

        .stApp {
            font-family: 'Inter', system-ui, sans-serif;
        }

        .block-container {
            padding-top: 1.5rem;
            padding-bottom: 2rem;
        }

        [data-testid="stSidebar"] {
            background: #f5f5f5;
            border-right: 1px solid #e5e7eb;
        }

        [data-testid="stDeckGlJsonChart"] {
            border-radius: 8px;
            overflow: hidden;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def evaluate_outputs(
    outputs: OutputTable,
    inputs: Mapping[str, Any],
    cache: MutableMapping[str, Any],
) -> Tuple[Dict[str, Any], Dict[str, Exception]]:
    """
    Evaluate every output, collecting failures instead of stopping at the first.

    Returns:
        (results, errors), both keyed by output id
    """
    results: Dict[str, Any] = {}
    errors: Dict[str, Exception] = {}

    for output_id in outputs:
        try:
            results[output_id] = outputs.evaluate(output_id, inputs, cache)
        except Exception as e:
            logger.exception(f"Output {output_id!r} failed")
            errors[output_id] = e

    return results, errors


def run_page(
    page: Page,
    outputs: OutputTable,
    page_title: Optional[str] = None,
    page_icon: Optional[str] = None,
    subtitle: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Render a page: validate, read inputs, evaluate outputs, draw panels.

    Streamlit reruns the calling script on every widget change; outputs
    whose inputs did not change come back from the session cache.

    Args:
        page: Page layout
        outputs: Registered render definitions
        page_title: Browser tab title (defaults to the page title)
        page_icon: Browser tab icon
        subtitle: Caption under the title

    Returns:
        The input values used for this run
    """
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=page_title or page.title,
        page_icon=page_icon or settings.dashboard.page_icon,
        layout=settings.dashboard.layout,
    )
    inject_custom_css()

    try:
        page.validate(outputs)
    except (KeyError, ValueError) as e:
        logger.error(f"Invalid layout for {page.title!r}: {e}")
        st.error(f"Layout error: {e}")
        st.stop()

    init_input_state(page)
    inputs = collect_inputs(page)
    results, errors = evaluate_outputs(outputs, inputs, st.session_state)

    render_title(page, subtitle)
    render_sidebar(page, results, errors)
    render_main(page, results, errors)

    return inputs
