import pytest

from data.datasets import load_iris_frame, numeric_columns
from visualization.plots import scatter_by_group


@pytest.fixture
def iris():
    return load_iris_frame()


def test_iris_frame(iris):
    assert iris.shape == (150, 5)
    assert list(iris["Species"].cat.categories) == ["setosa", "versicolor", "virginica"]
    assert numeric_columns(iris) == ["Sepal.Length", "Sepal.Width", "Petal.Length", "Petal.Width"]


def test_iris_frame_is_a_copy(iris):
    iris.drop(index=iris.index, inplace=True)
    assert len(load_iris_frame()) == 150


def test_scatter_one_series_per_group(iris):
    fig = scatter_by_group(iris, "Sepal.Length", "Petal.Length", color_by="Species", title="Iris")
    ax = fig.axes[0]
    assert len(ax.collections) == 3
    assert [t.get_text() for t in ax.get_legend().get_texts()] == ["setosa", "versicolor", "virginica"]
    assert ax.get_title() == "Iris"


def test_scatter_without_groups(iris):
    fig = scatter_by_group(iris, "Sepal.Width", "Petal.Width")
    assert len(fig.axes[0].collections) == 1
    assert fig.axes[0].get_legend() is None


def test_scatter_missing_column(iris):
    with pytest.raises(KeyError, match="Sepal.Size"):
        scatter_by_group(iris, "Sepal.Size", "Petal.Length")
