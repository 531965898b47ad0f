"""Bundled teaching datasets."""

from functools import lru_cache

import pandas as pd
from sklearn.datasets import load_iris

# R-style column names, as used throughout the dashboard tutorial
IRIS_COLUMNS = {
    "sepal length (cm)": "Sepal.Length",
    "sepal width (cm)": "Sepal.Width",
    "petal length (cm)": "Petal.Length",
    "petal width (cm)": "Petal.Width",
}


@lru_cache(maxsize=1)
def _iris_frame() -> pd.DataFrame:
  bunch = load_iris(as_frame=True)
  df = bunch.frame.rename(columns=IRIS_COLUMNS)
  df["Species"] = pd.Categorical.from_codes(df.pop("target"), bunch.target_names)
  return df


def load_iris_frame() -> pd.DataFrame:
  """
  The iris measurements with a categorical Species column.

  Returns:
      A fresh copy (150 rows) so callers may modify it freely
  """
  return _iris_frame().copy()


def numeric_columns(df: pd.DataFrame):
  """Names of the numeric columns, in frame order."""
  return df.select_dtypes(include="number").columns.tolist()
