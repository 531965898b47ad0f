"""Input widgets backed by Streamlit session state."""

from typing import Any, Dict

import streamlit as st

from dashboard.layout import CHECKBOX, MULTISELECT, SELECT, SLIDER, InputControl, Page

# Session-state keys of the input widgets
INPUT_KEY_PREFIX = "input_"


def input_key(input_id: str) -> str:
  return f"{INPUT_KEY_PREFIX}{input_id}"


def init_input_state(page: Page) -> None:
  """Initialize widget state with the page's input defaults."""
  for input_id, value in page.default_inputs().items():
    key = input_key(input_id)
    if key not in st.session_state:
      st.session_state[key] = value


def collect_inputs(page: Page) -> Dict[str, Any]:
  """Current value of every page input, by input id."""
  return {
      input_id: st.session_state.get(input_key(input_id))
      for input_id in page.input_ids()
  }


def render_input(control: InputControl) -> Any:
  """
  Draw one input widget.

  The widget reads its value from session state (seeded by
  init_input_state), so no default is passed here.

  Returns:
      The widget's current value
  """
  key = input_key(control.input_id)

  if control.kind == SELECT:
    return st.selectbox(control.label, options=list(control.options), key=key, help=control.help)

  if control.kind == MULTISELECT:
    return st.multiselect(
        control.label,
        options=list(control.options),
        key=key,
        help=control.help,
        placeholder="Search and select...",
    )

  if control.kind == SLIDER:
    return st.slider(
        control.label,
        min_value=control.min_value,
        max_value=control.max_value,
        step=control.step,
        key=key,
        help=control.help,
    )

  if control.kind == CHECKBOX:
    return st.checkbox(control.label, key=key, help=control.help)

  raise ValueError(f"Unknown input kind {control.kind!r}")
