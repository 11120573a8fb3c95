"""
exporters.py

Turns a projection into downloadable artifacts:
- an Excel workbook (Parameters, Current Investments, Year by Year Breakdown)
- a CSV of the year-by-year projection
- an HTML report
No numbers are computed here beyond what the engine already produced.
"""

from datetime import date
from io import BytesIO
from typing import Iterable, Optional, Sequence

import pandas as pd
from jinja2 import Template

import calculators
from config import FUTURE_VALUE_HORIZONS
from formatting import format_currency, format_percentage, safe_formatter
from models import InvestmentEntry, ProjectionResult

WORKBOOK_NAME = "Retirement_Plan.xlsx"


def horizon_label(years: int) -> str:
    return "1 Year" if years == 1 else f"{years} Years"


def parameters_frame(result: ProjectionResult) -> pd.DataFrame:
    params = result.parameters
    rows = [
        ("Current Total Assets", result.summary.total_assets, "Total current investments"),
        ("Retirement Goal", params.retirement_goal, "Target amount"),
        ("Years to Retirement", params.years_to_retirement, "Planning horizon"),
        ("Inflation Rate", params.inflation_rate, "Annual inflation rate (%)"),
        ("Required Annual Savings", result.required_annual_savings, "Additional savings needed per year"),
        ("Yearly Contribution", params.yearly_contribution, "Planned annual contribution"),
        ("Inflation-Adjusted Goal", result.real_goal, "Goal adjusted for inflation"),
        ("Weighted Average Return", result.weighted_average_return * 100,
         "Portfolio weighted average return (%)"),
    ]
    return pd.DataFrame(rows, columns=["Parameter", "Value", "Notes"])


def investments_frame(investments: Iterable[InvestmentEntry],
                      horizons: Sequence[int] = FUTURE_VALUE_HORIZONS,
                      inflation_rate: Optional[float] = None) -> pd.DataFrame:
    """
    Current holdings with their future value at each fixed horizon. With an
    `inflation_rate`, 'Total' and 'Inflation-Adjusted Total' rows follow the holdings.
    """
    investments = list(investments)
    future = calculators.future_value_table(investments, horizons)
    rows = []
    for inv in investments:
        row = {
            "Location": inv.category.value,
            "Name": inv.name,
            "Asset Type": inv.asset_type,
            "Amount": inv.amount,
            "Return Rate": inv.return_rate,
        }
        for years in horizons:
            row[horizon_label(years)] = future.at[inv.id, years]
        rows.append(row)
    if inflation_rate is not None:
        totals = calculators.future_value_totals(investments, inflation_rate, horizons)
        for label, values in totals.iterrows():
            row = {"Location": "", "Name": label, "Asset Type": "", "Amount": values["Amount"], "Return Rate": None}
            for years in horizons:
                row[horizon_label(years)] = values.loc[years]
            rows.append(row)
    columns = ["Location", "Name", "Asset Type", "Amount", "Return Rate"] + [horizon_label(y) for y in horizons]
    return pd.DataFrame(rows, columns=columns)


def growth_frame(investments: Iterable[InvestmentEntry], inflation_rate: float,
                 horizons: Sequence[int] = FUTURE_VALUE_HORIZONS) -> pd.DataFrame:
    """Percent growth of the horizon totals over today's total, nominal and inflation-adjusted."""
    growth = calculators.future_value_growth(
        calculators.future_value_totals(investments, inflation_rate, horizons))
    growth.columns = [horizon_label(y) for y in horizons]
    return growth.rename_axis("Name").reset_index()


def breakdown_frame(result: ProjectionResult) -> pd.DataFrame:
    inflation = result.parameters.inflation_rate
    rows = [
        {
            "Year": p.year,
            "Total Assets": p.total_assets,
            "Real Value": p.real_value,
            "Additional Savings": p.additional_savings,
            "Inflation Factor": calculators.inflation_factor(inflation, p.year),
            "Notes": "Initial Year" if p.year == 0 else "Projected",
        }
        for p in result.points
    ]
    return pd.DataFrame(rows, columns=["Year", "Total Assets", "Real Value", "Additional Savings",
                                       "Inflation Factor", "Notes"])


def export_workbook(result: ProjectionResult, investments: Iterable[InvestmentEntry]) -> bytes:
    buf = BytesIO()
    breakdown = breakdown_frame(result)
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        parameters_frame(result).to_excel(writer, sheet_name="Parameters", index=False)
        investments_frame(investments).to_excel(writer, sheet_name="Current Investments", index=False)
        breakdown.to_excel(writer, sheet_name="Year by Year Breakdown", index=False)

        sheet = writer.sheets["Year by Year Breakdown"]
        for row in range(2, len(breakdown) + 2):
            for col in ("B", "C", "D"):
                sheet[f"{col}{row}"].number_format = "#,##0"
            sheet[f"E{row}"].number_format = "0.00"
    return buf.getvalue()


def export_projection_csv(result: ProjectionResult) -> tuple:
    return "retirement_projection.csv", result.to_frame().to_csv(index=False).encode()


REPORT_TEMPLATE = """
<html>
<head>
    <title>Retirement Plan Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .header { text-align: center; margin-bottom: 30px; }
        .section { margin: 20px 0; padding: 20px; border: 1px solid #eee; border-radius: 5px; }
        .metric { margin: 10px 0; }
        .alert { padding: 15px; background-color: #f8d7da; border: 1px solid #f5c6cb; border-radius: 4px; }
        .info { padding: 15px; background-color: #d1ecf1; border: 1px solid #bee5eb; border-radius: 4px; }
        table { border-collapse: collapse; width: 100%; margin: 20px 0; }
        th, td { border: 1px solid #ddd; padding: 8px; text-align: right; }
        th { background-color: #f2f2f2; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Retirement Plan Report</h1>
        <p>Generated on {{ generation_date }}</p>
    </div>
    <div class="section">
        <h2>Summary</h2>
        {% if required_savings_raw > 0 %}
        <div class="alert">Additional savings needed: {{ required_savings }} per year</div>
        {% else %}
        <div class="info">On track: no additional savings needed</div>
        {% endif %}
        {% for label, value in metrics %}
        <div class="metric">{{ label }}: {{ value }}</div>
        {% endfor %}
    </div>
    <div class="section">
        <h2>Current Investments</h2>
        {{ investments_table }}
        <h3>Growth vs Today</h3>
        {{ growth_table }}
    </div>
    {% if chart %}
    <div class="section">
        <h2>Projected Growth</h2>
        {{ chart }}
    </div>
    {% endif %}
    <div class="section">
        <h2>Year by Year Breakdown</h2>
        {{ breakdown_table }}
    </div>
    <div class="section">
        <h2>Key Assumptions and Notes</h2>
        <ul>
            <li>Each investment compounds yearly at its own return rate</li>
            <li>Yearly contributions and required savings are added at the start of each year and grow at the weighted average return</li>
            <li>Target goal grows with inflation</li>
            <li>No taxes or currency effects are modeled</li>
        </ul>
    </div>
</body>
</html>
"""


def generate_html_report(result: ProjectionResult, investments: Iterable[InvestmentEntry],
                         figure=None) -> str:
    """
    Render the HTML report. `figure` is an optional plotly figure embedded
    as interactive HTML.
    """
    params = result.parameters
    metrics = [
        ("Current Total Assets", format_currency(result.summary.total_assets)),
        ("Retirement Goal (today)", format_currency(params.retirement_goal)),
        ("Inflation-Adjusted Goal", format_currency(result.real_goal)),
        ("Years to Retirement", params.years_to_retirement),
        ("Inflation Rate", format_percentage(params.inflation_rate)),
        ("Weighted Average Return", format_percentage(result.weighted_average_return * 100)),
        ("Projected Value of Current Assets", format_currency(result.projected_future_value)),
        ("Yearly Contribution", format_currency(params.yearly_contribution)),
    ]
    money = "{:,.0f}".format
    investments = list(investments)
    investments_table = investments_frame(investments, inflation_rate=params.inflation_rate).to_html(
        index=False, float_format=money, formatters={"Return Rate": safe_formatter("{:.2f}%")}, border=0)
    growth = growth_frame(investments, params.inflation_rate)
    growth_table = growth.to_html(
        index=False, formatters={c: "{:+.1f}%".format for c in growth.columns if c != "Name"}, border=0)
    breakdown_table = breakdown_frame(result).to_html(
        index=False, formatters={"Inflation Factor": "{:.2f}".format}, border=0)
    chart: Optional[str] = None
    if figure is not None:
        chart = figure.to_html(full_html=False, include_plotlyjs="cdn")

    template = Template(REPORT_TEMPLATE)
    return template.render(
        generation_date=date.today().isoformat(),
        metrics=metrics,
        required_savings=format_currency(result.required_annual_savings),
        required_savings_raw=result.required_annual_savings,
        investments_table=investments_table,
        growth_table=growth_table,
        breakdown_table=breakdown_table,
        chart=chart,
    )
