"""Sidebar component with the page's inputs and notes."""

from typing import Any, Mapping, Optional

import streamlit as st

from dashboard.layout import Page
from .panels import render_element


def render_sidebar(
    page: Page,
    results: Optional[Mapping[str, Any]] = None,
    errors: Optional[Mapping[str, Exception]] = None,
) -> None:
  """
  Render the sidebar panel.

  Inputs draw from session state, so init_input_state() must run first.

  Args:
      page: Page layout
      results: Rendered values, for any outputs placed in the sidebar
      errors: Exceptions raised by failed outputs
  """
  if not page.sidebar.items:
    return

  with st.sidebar:
    for element in page.sidebar.items:
      render_element(element, results or {}, errors)
