"""Matplotlib figures for the dashboard plot outputs."""

from typing import Optional, Tuple

import pandas as pd
from matplotlib import colormaps
from matplotlib.figure import Figure

# Figures are built without pyplot so reruns never share global state
DEFAULT_FIGSIZE = (8, 5)


def _bw_theme(ax) -> None:
  """White panel, light grid, dark border."""
  ax.set_facecolor("white")
  ax.grid(True, color="#d9d9d9", linewidth=0.6)
  ax.set_axisbelow(True)
  for spine in ax.spines.values():
    spine.set_color("#333333")
    spine.set_linewidth(0.8)


def scatter_by_group(
    df: pd.DataFrame,
    x: str,
    y: str,
    color_by: Optional[str] = None,
    size: float = 3,
    alpha: float = 0.7,
    title: Optional[str] = None,
    figsize: Tuple[float, float] = DEFAULT_FIGSIZE,
) -> Figure:
  """
  Scatter plot of y against x, one color per group.

  Args:
      df: Data to plot
      x: Column on the x axis
      y: Column on the y axis
      color_by: Grouping column (one legend entry per group)
      size: Point size (same scale as ggplot's size, roughly 3 = medium)
      alpha: Point transparency
      title: Optional plot title
      figsize: Figure size in inches

  Returns:
      Matplotlib Figure
  """
  missing = [c for c in (x, y, color_by) if c and c not in df.columns]
  if missing:
    raise KeyError(f"Columns not found for plotting: {missing}")

  fig = Figure(figsize=figsize)
  ax = fig.add_subplot()
  _bw_theme(ax)

  # ggplot sizes are in mm-ish units, matplotlib's s is points squared
  marker_area = (size * 2.5) ** 2

  if color_by:
    palette = colormaps["tab10"]
    groups = df.groupby(color_by, observed=True, sort=True)
    for i, (group, rows) in enumerate(groups):
      ax.scatter(
          rows[x],
          rows[y],
          s=marker_area,
          alpha=alpha,
          color=palette(i % palette.N),
          label=str(group),
          edgecolors="none",
      )
    if len(groups):
      ax.legend(title=color_by, frameon=False, loc="center left", bbox_to_anchor=(1.0, 0.5))
  else:
    ax.scatter(df[x], df[y], s=marker_area, alpha=alpha, edgecolors="none")

  ax.set_xlabel(x)
  ax.set_ylabel(y)
  if title:
    ax.set_title(title)

  fig.tight_layout()
  return fig
