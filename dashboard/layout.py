"""
Declarative page layout: a title, a sidebar of inputs and a main panel of rows.

    page = fluid_page(
        "Shiny training module",
        sidebar=sidebar_panel(text("Inputs go here")),
        main=main_panel(
            row(plot_output("irisPlot")),
            row(table_output("irisTable")),
        ),
    )
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from utils.logger import get_logger
from .outputs import MAP, PLOT, TABLE, OutputTable

logger = get_logger("dashboard.layout")

SELECT = "select"
MULTISELECT = "multiselect"
SLIDER = "slider"
CHECKBOX = "checkbox"


@dataclass(frozen=True)
class OutputPlacement:
  """Where a rendered output is displayed."""
  output_id: str
  kind: str
  height: Optional[int] = None


@dataclass(frozen=True)
class Text:
  """Static markdown."""
  body: str


@dataclass(frozen=True)
class InputControl:
  """A widget whose current value is exposed to outputs under input_id."""
  input_id: str
  kind: str
  label: str
  default: Any = None
  options: Tuple[Any, ...] = ()
  min_value: Any = None
  max_value: Any = None
  step: Any = None
  help: Optional[str] = None


Element = Union[OutputPlacement, Text, InputControl]


@dataclass(frozen=True)
class Row:
  """One horizontal band of the main panel; items sit side by side."""
  items: Tuple[Element, ...]
  widths: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class SidebarPanel:
  items: Tuple[Element, ...] = ()


@dataclass(frozen=True)
class MainPanel:
  rows: Tuple[Row, ...] = ()


# -- element constructors ----------------------------------------------------

def table_output(output_id: str) -> OutputPlacement:
  return OutputPlacement(output_id, TABLE)


def plot_output(output_id: str, height: Optional[int] = None) -> OutputPlacement:
  """height resizes the figure, in pixels."""
  return OutputPlacement(output_id, PLOT, height)


def map_output(output_id: str, height: Optional[int] = None) -> OutputPlacement:
  return OutputPlacement(output_id, MAP, height)


def text(body: str) -> Text:
  return Text(body)


def select_input(input_id: str, label: str, options: Sequence[Any], selected: Any = None, help: str = None) -> InputControl:
  """Single choice; defaults to the first option."""
  options = tuple(options)
  if not options:
    raise ValueError(f"Input {input_id!r} needs at least one option")
  if selected is None:
    selected = options[0]
  elif selected not in options:
    raise ValueError(f"Input {input_id!r}: {selected!r} is not one of the options")
  return InputControl(input_id, SELECT, label, default=selected, options=options, help=help)


def multiselect_input(
    input_id: str,
    label: str,
    options: Sequence[Any],
    selected: Optional[Sequence[Any]] = None,
    help: str = None,
) -> InputControl:
  """Several choices; defaults to all options."""
  options = tuple(options)
  selected = list(options) if selected is None else list(selected)
  unknown = [s for s in selected if s not in options]
  if unknown:
    raise ValueError(f"Input {input_id!r}: {unknown} are not options")
  return InputControl(input_id, MULTISELECT, label, default=selected, options=options, help=help)


def slider_input(
    input_id: str,
    label: str,
    min_value: float,
    max_value: float,
    value: float,
    step: Optional[float] = None,
    help: str = None,
) -> InputControl:
  if not min_value <= value <= max_value:
    raise ValueError(f"Input {input_id!r}: {value} outside [{min_value}, {max_value}]")
  return InputControl(
      input_id, SLIDER, label,
      default=value, min_value=min_value, max_value=max_value, step=step, help=help,
  )


def checkbox_input(input_id: str, label: str, value: bool = False, help: str = None) -> InputControl:
  return InputControl(input_id, CHECKBOX, label, default=bool(value), help=help)


# -- containers ----------------------------------------------------------------

def row(*items: Element, widths: Optional[Sequence[float]] = None) -> Row:
  if widths is not None and len(widths) != len(items):
    raise ValueError(f"Row has {len(items)} items but {len(widths)} widths")
  return Row(tuple(items), tuple(widths) if widths is not None else None)


def sidebar_panel(*items: Element) -> SidebarPanel:
  return SidebarPanel(tuple(items))


def main_panel(*rows: Union[Row, Element]) -> MainPanel:
  """Rows of the main panel; a bare element becomes a row of its own."""
  return MainPanel(tuple(r if isinstance(r, Row) else Row((r,)) for r in rows))


@dataclass(frozen=True)
class Page:
  """A page: title panel, sidebar panel and main panel."""
  title: str
  sidebar: SidebarPanel = SidebarPanel()
  main: MainPanel = MainPanel()

  def _elements(self) -> List[Element]:
    elements = list(self.sidebar.items)
    for r in self.main.rows:
      elements.extend(r.items)
    return elements

  def placements(self) -> List[OutputPlacement]:
    """Output placements in layout order (sidebar first, then rows top to bottom)."""
    return [e for e in self._elements() if isinstance(e, OutputPlacement)]

  def output_ids(self) -> List[str]:
    return [p.output_id for p in self.placements()]

  def inputs(self) -> List[InputControl]:
    return [e for e in self._elements() if isinstance(e, InputControl)]

  def input_ids(self) -> List[str]:
    return [i.input_id for i in self.inputs()]

  def default_inputs(self) -> Dict[str, Any]:
    return {i.input_id: i.default for i in self.inputs()}

  def validate(self, outputs: OutputTable) -> None:
    """
    Check the layout against the registered outputs.

    Raises:
        KeyError: A placement names an output that is not registered
        ValueError: Duplicate input ids or placements, or a placement whose
            kind differs from the registered output's kind
    """
    input_ids = self.input_ids()
    duplicated_inputs = sorted({i for i in input_ids if input_ids.count(i) > 1})
    if duplicated_inputs:
      raise ValueError(f"Duplicate input ids: {duplicated_inputs}")

    output_ids = self.output_ids()
    duplicated_outputs = sorted({o for o in output_ids if output_ids.count(o) > 1})
    if duplicated_outputs:
      raise ValueError(f"Outputs placed more than once: {duplicated_outputs}")

    for placement in self.placements():
      if placement.output_id not in outputs:
        raise KeyError(
            f"Layout places unknown output {placement.output_id!r}, registered: {list(outputs)}"
        )
      registered = outputs[placement.output_id].kind
      if registered != placement.kind:
        raise ValueError(
            f"Output {placement.output_id!r} is a {registered} but is placed as a {placement.kind}"
        )

    unplaced = [o for o in outputs if o not in output_ids]
    if unplaced:
      logger.warning(f"Outputs registered but never placed: {unplaced}")


def fluid_page(
    title: str,
    sidebar: Optional[SidebarPanel] = None,
    main: Optional[MainPanel] = None,
) -> Page:
  return Page(title=title, sidebar=sidebar or SidebarPanel(), main=main or MainPanel())
