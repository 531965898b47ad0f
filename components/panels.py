"""Main panel component: rows of rendered outputs."""

from typing import Any, Mapping, Optional

import streamlit as st

from dashboard.layout import InputControl, OutputPlacement, Page, Text
from dashboard.outputs import MAP, PLOT, TABLE
from visualization.map_view import render_deck
from .inputs import render_input


def render_output(placement: OutputPlacement, value: Any) -> None:
  """Draw a rendered value in its placement."""
  if placement.kind == TABLE:
    st.dataframe(value, width="stretch", hide_index=True)
  elif placement.kind == PLOT:
    if placement.height:
      value.set_figheight(placement.height / value.dpi)
    st.pyplot(value, clear_figure=False, width="stretch")
  elif placement.kind == MAP:
    render_deck(value, height=placement.height)


def render_output_error(placement: OutputPlacement, error: Exception) -> None:
  st.error(f"Could not render {placement.output_id!r}: {error}")


def render_element(
    element,
    results: Mapping[str, Any],
    errors: Optional[Mapping[str, Exception]] = None,
) -> None:
  """Draw any layout element: text, input widget or output placement."""
  errors = errors or {}

  if isinstance(element, Text):
    st.markdown(element.body)
  elif isinstance(element, InputControl):
    render_input(element)
  elif isinstance(element, OutputPlacement):
    if element.output_id in errors:
      render_output_error(element, errors[element.output_id])
    else:
      render_output(element, results.get(element.output_id))


def render_main(
    page: Page,
    results: Mapping[str, Any],
    errors: Optional[Mapping[str, Exception]] = None,
) -> None:
  """
  Render the main panel row by row.

  Args:
      page: Page layout
      results: Rendered values by output id
      errors: Exceptions raised by failed outputs, by output id
  """
  for row in page.main.rows:
    columns = st.columns(list(row.widths) if row.widths else len(row.items))
    for column, element in zip(columns, row.items):
      with column:
        render_element(element, results, errors)


def render_title(page: Page, subtitle: Optional[str] = None) -> None:
  st.title(page.title)
  if subtitle:
    st.caption(subtitle)
