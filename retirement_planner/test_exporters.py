from io import BytesIO

import numpy as np
import pandas as pd
import pytest

from charts import build_projection_figure
from exporters import (
    breakdown_frame,
    export_projection_csv,
    export_workbook,
    generate_html_report,
    growth_frame,
    investments_frame,
    parameters_frame,
)
from scenario import project


@pytest.fixture
def result(sample_entries, default_parameters):
    return project(sample_entries, default_parameters)


def test_parameters_frame(result):
    frame = parameters_frame(result).set_index("Parameter")
    assert frame.loc["Current Total Assets", "Value"] == 500000
    assert np.isclose(frame.loc["Weighted Average Return", "Value"], 5.85)
    assert np.isclose(frame.loc["Inflation-Adjusted Goal", "Value"], result.real_goal)


def test_investments_frame_future_values(single_stock):
    frame = investments_frame([single_stock])
    row = frame.iloc[0]
    assert row["Location"] == "US"
    assert list(frame.columns[-5:]) == ["1 Year", "3 Years", "5 Years", "10 Years", "15 Years"]
    assert np.isclose(row["3 Years"], 125971.20)
    assert np.isclose(row["15 Years"], 317216.91, atol=0.01)


def test_investments_frame_totals_rows(sample_entries):
    frame = investments_frame(sample_entries, inflation_rate=3.0)
    assert len(frame) == 6
    assert frame["Name"].tolist()[-2:] == ["Total", "Inflation-Adjusted Total"]
    total = frame.iloc[-2]
    real = frame.iloc[-1]
    assert total["Amount"] == 500000
    assert real["Amount"] == 500000
    assert np.isclose(total["1 Year"], frame["1 Year"].iloc[:4].sum())
    assert np.isclose(total["1 Year"], 529250.0)
    assert np.isclose(real["15 Years"], total["15 Years"] / 1.03 ** 15)
    assert pd.isna(total["Return Rate"])


def test_investments_frame_without_inflation_has_no_totals(sample_entries):
    assert len(investments_frame(sample_entries)) == 4


def test_growth_frame(single_stock):
    frame = growth_frame([single_stock], 3.0)
    assert frame["Name"].tolist() == ["Total", "Inflation-Adjusted Total"]
    assert list(frame.columns) == ["Name", "1 Year", "3 Years", "5 Years", "10 Years", "15 Years"]
    assert np.isclose(frame.loc[0, "1 Year"], 8.0)
    assert np.isclose(frame.loc[1, "1 Year"], (1.08 / 1.03 - 1) * 100)


def test_breakdown_frame(result):
    frame = breakdown_frame(result)
    assert len(frame) == 16
    assert frame.loc[0, "Notes"] == "Initial Year"
    assert frame.loc[1, "Notes"] == "Projected"
    assert np.isclose(frame.loc[15, "Inflation Factor"], 1.03 ** 15)


def test_export_workbook_sheets(result, sample_entries):
    data = export_workbook(result, sample_entries)
    sheets = pd.read_excel(BytesIO(data), sheet_name=None)
    assert list(sheets) == ["Parameters", "Current Investments", "Year by Year Breakdown"]
    assert len(sheets["Current Investments"]) == 4
    assert sheets["Year by Year Breakdown"]["Year"].tolist() == list(range(16))


def test_export_projection_csv(result):
    name, blob = export_projection_csv(result)
    assert name.endswith(".csv")
    assert blob.decode().splitlines()[0].startswith("year,totalAssets,realValue,targetGoal,additionalSavings")


def test_generate_html_report(result, sample_entries):
    html = generate_html_report(result, sample_entries, build_projection_figure(result))
    assert "Retirement Plan Report" in html
    assert "Year by Year Breakdown" in html
    assert "US Stock Fund" in html
    assert "$7,789,837" in html
    assert "Inflation-Adjusted Total" in html
    assert "529,250" in html
    assert "513,835" in html
    assert "Growth vs Today" in html
    assert "+2.8%" in html
