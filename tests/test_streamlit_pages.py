from pathlib import Path

import pytest
from matplotlib.figure import Figure
from streamlit.testing.v1 import AppTest

from components import panels
from dashboard.layout import plot_output

ROOT = Path(__file__).resolve().parent.parent
TIMEOUT = 60


def failing_output_page():
    import pandas as pd

    from dashboard import OutputTable, fluid_page, main_panel, plot_output, row, table_output
    from dashboard.runtime import run_page

    outputs = OutputTable(name="failing")

    @outputs.render_table("good")
    def good():
        return pd.DataFrame({"a": [1, 2, 3]})

    @outputs.render_plot("bad")
    def bad():
        raise RuntimeError("boom")

    page = fluid_page("Failing", main=main_panel(row(table_output("good"), plot_output("bad"))))
    run_page(page, outputs)


def broken_layout_page():
    import pandas as pd

    from dashboard import OutputTable, fluid_page, main_panel, row, table_output
    from dashboard.runtime import run_page

    outputs = OutputTable(name="broken")

    @outputs.render_table("table")
    def table():
        return pd.DataFrame({"a": [1]})

    page = fluid_page("Broken", main=main_panel(row(table_output("tabel"))))
    run_page(page, outputs)


def test_iris_page_filters_and_keeps_selection():
    at = AppTest.from_file(str(ROOT / "app.py")).run(timeout=TIMEOUT)
    assert not at.exception
    assert at.title[0].value == "Shiny training module"
    assert len(at.dataframe) == 1
    assert len(at.dataframe[0].value) == 150

    at.multiselect(key="input_species").set_value(["setosa"]).run(timeout=TIMEOUT)
    assert len(at.dataframe[0].value) == 50

    # The selection survives a rerun
    at.run(timeout=TIMEOUT)
    assert at.session_state["input_species"] == ["setosa"]
    assert len(at.dataframe[0].value) == 50


def test_map_page_table_follows_categories():
    at = AppTest.from_file(str(ROOT / "map_app.py")).run(timeout=TIMEOUT)
    assert not at.exception
    assert len(at.dataframe[0].value) == 5

    at.multiselect(key="input_categories").set_value(["office", "park"]).run(timeout=TIMEOUT)
    assert not at.exception
    assert at.dataframe[0].value.empty


def test_failing_output_only_replaces_its_own_slot():
    at = AppTest.from_function(failing_output_page).run(timeout=TIMEOUT)
    assert not at.exception
    assert len(at.error) == 1
    assert "bad" in at.error[0].value
    assert "boom" in at.error[0].value
    assert len(at.dataframe) == 1
    assert len(at.dataframe[0].value) == 3


def test_layout_error_stops_the_page():
    at = AppTest.from_function(broken_layout_page).run(timeout=TIMEOUT)
    assert not at.exception
    assert len(at.error) == 1
    assert "tabel" in at.error[0].value
    assert len(at.dataframe) == 0
    assert len(at.title) == 0


def test_plot_height_resizes_figure(monkeypatch):
    shown = []
    monkeypatch.setattr(panels.st, "pyplot", lambda fig, **kwargs: shown.append(fig))

    fig = Figure(figsize=(8, 5), dpi=100)
    panels.render_output(plot_output("p", height=300), fig)

    assert shown == [fig]
    assert fig.get_figheight() * fig.dpi == pytest.approx(300)
