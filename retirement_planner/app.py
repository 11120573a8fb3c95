import logging

import streamlit as st

import persistence
from charts import build_allocation_figure, build_projection_figure
from config import APP_NAME, DEFAULTS, DEFAULT_VISIBLE_SERIES, SNAPSHOT_PATH, configure_logging
from errors import ImportValidationError, PlannerError
from exporters import (
    WORKBOOK_NAME,
    export_projection_csv,
    export_workbook,
    generate_html_report,
    growth_frame,
    investments_frame,
)
from formatting import format_currency, format_percentage, safe_formatter
from importer import import_investments
from models import Category, ProjectionParameters
from scenario import project
from store import InvestmentStore

logger = logging.getLogger(__name__)


# -----------------------------------------------
# Session state
# -----------------------------------------------
def initial_store() -> InvestmentStore:
    """Saved investments if there are any, otherwise the sample data."""
    try:
        snapshot = persistence.load_snapshot(SNAPSHOT_PATH)
    except PlannerError as exc:
        logger.warning("%s; starting from sample data", exc)
        snapshot = None
    store = InvestmentStore()
    store.reset(snapshot)
    return store


def get_store() -> InvestmentStore:
    if "store" not in st.session_state:
        st.session_state["store"] = initial_store()
    return st.session_state["store"]


def save(store: InvestmentStore):
    persistence.save_snapshot(store, SNAPSHOT_PATH)


# -----------------------------------------------
# Investment editor
# -----------------------------------------------
def render_investment_editor(store: InvestmentStore):
    asset_types = list(store.asset_types)
    locations = [c.value for c in Category]
    changed = False

    for inv in store.entries():
        cols = st.columns([2, 3, 3, 3, 2, 1])
        location = cols[0].selectbox("Location", locations, index=locations.index(inv.category.value),
                                     key=f"loc_{inv.id}", label_visibility="collapsed")
        name = cols[1].text_input("Name", inv.name, key=f"name_{inv.id}", label_visibility="collapsed")
        type_index = asset_types.index(inv.asset_type) if inv.asset_type in asset_types else 0
        asset_type = cols[2].selectbox("Asset Type", asset_types, index=type_index,
                                       key=f"type_{inv.id}", label_visibility="collapsed")
        amount = cols[3].number_input("Amount", min_value=0.0, value=float(inv.amount), step=1000.0,
                                      key=f"amount_{inv.id}", label_visibility="collapsed")
        rate = cols[4].number_input("Return Rate", min_value=0.0, max_value=20.0, value=float(inv.return_rate),
                                    step=0.5, key=f"rate_{inv.id}", label_visibility="collapsed")
        if cols[5].button("✕", key=f"remove_{inv.id}"):
            store.remove(inv.id)
            changed = True
            continue

        if location != inv.category.value:
            store.move(inv.id, inv.category, location)
            changed = True
        if name != inv.name:
            store.update(inv.id, "name", name)
            changed = True
        if asset_type != inv.asset_type:
            store.update(inv.id, "asset_type", asset_type)
            st.session_state.pop(f"rate_{inv.id}", None)
            changed = True
        elif rate != inv.return_rate:
            store.update(inv.id, "return_rate", rate)
            changed = True
        if amount != inv.amount:
            store.update(inv.id, "amount", amount)
            changed = True

    with st.expander("Add investment", expanded=False):
        with st.form("add_investment", clear_on_submit=True):
            category = st.selectbox("Location", locations)
            name = st.text_input("Name")
            asset_type = st.selectbox("Asset Type", asset_types, index=asset_types.index("Stocks"))
            amount = st.number_input("Amount", min_value=0.0, value=0.0, step=1000.0)
            rate = st.number_input("Return Rate (%)", min_value=0.0, max_value=20.0,
                                   value=store.asset_types.default_rate(asset_type), step=0.5)
            if st.form_submit_button("Add") and name:
                store.add(name, asset_type, amount, category, return_rate=rate)
                changed = True

    if changed:
        save(store)
        st.rerun()


# -----------------------------------------------
# STREAMLIT APP
# -----------------------------------------------
def main():
    configure_logging()
    st.set_page_config(page_title=APP_NAME, layout="wide")
    st.title(APP_NAME)
    store = get_store()

    # ---------- SIDEBAR ----------
    st.sidebar.header("Your Goal")
    retirement_goal = st.sidebar.number_input("Retirement Goal (today's money)", 0, 100_000_000,
                                              DEFAULTS["retirement_goal"], step=100_000)
    years = st.sidebar.number_input("Years to Retirement", 0, 60, DEFAULTS["years_to_retirement"])
    inflation_rate = st.sidebar.slider("Inflation Rate (%)", 0.0, 15.0, float(DEFAULTS["inflation_rate"]), 0.1)
    yearly_contribution = st.sidebar.number_input("Yearly Contribution", 0, 10_000_000,
                                                  DEFAULTS["yearly_contribution"], step=1_000)

    current_total = store.total()
    new_total = st.sidebar.number_input("Current Total Assets", 0.0, value=float(current_total), step=10_000.0)
    if new_total != current_total:
        store.rescale_total(new_total)
        save(store)
        st.rerun()

    st.sidebar.header("Data")
    uploaded = st.sidebar.file_uploader("Upload Investments (.xlsx or .csv)", type=["xlsx", "xls", "csv"])
    if uploaded is not None and st.sidebar.button("Replace investments with file"):
        try:
            count = import_investments(store, uploaded, uploaded.name)
        except ImportValidationError as exc:
            st.sidebar.error(str(exc))
        else:
            save(store)
            st.sidebar.success(f"Imported {count} investments")
            st.rerun()
    if st.sidebar.button("Reset Data"):
        persistence.clear_snapshot(SNAPSHOT_PATH)
        store.reset()
        st.rerun()

    parameters = ProjectionParameters(
        retirement_goal=retirement_goal,
        years_to_retirement=int(years),
        inflation_rate=inflation_rate,
        yearly_contribution=yearly_contribution,
    )
    result = project(store.entries(), parameters, store.asset_types)

    # ---------- KEY METRICS ----------
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Current Assets", format_currency(result.summary.total_assets))
    col2.metric("Inflation-Adjusted Goal", format_currency(result.real_goal))
    col3.metric("Weighted Avg Return", format_percentage(result.weighted_average_return * 100))
    col4.metric("Required Annual Savings", format_currency(result.required_annual_savings))

    # ---------- PROJECTION ----------
    st.subheader("Projected Growth")
    frame = result.to_frame()
    series = [c for c in frame.columns if c != "year"]
    defaults = [s for s in series if DEFAULT_VISIBLE_SERIES.get(s, False)]
    shown = st.multiselect("Series", series, default=defaults)
    figure = build_projection_figure(result, {s: s in shown for s in series})
    st.plotly_chart(figure, use_container_width=True)

    # ---------- INVESTMENTS ----------
    st.subheader("Investments")
    render_investment_editor(store)
    table = investments_frame(store.entries(), inflation_rate=inflation_rate)
    money_cols = [c for c in table.columns if c not in ("Location", "Name", "Asset Type", "Return Rate")]
    fmt = {c: safe_formatter("${:,.0f}") for c in money_cols}
    fmt["Return Rate"] = safe_formatter("{:.2f}%")
    st.dataframe(table.style.format(fmt))
    growth = growth_frame(store.entries(), inflation_rate).set_index("Name")
    st.caption("Growth vs today")
    st.dataframe(growth.style.format(safe_formatter("{:+.1f}%")))

    by = st.radio("Allocation by", ["category", "asset_type"], horizontal=True)
    st.plotly_chart(build_allocation_figure(result.summary, by=by), use_container_width=True)

    st.subheader("Year by Year")
    st.dataframe(frame.set_index("year"))

    # ---------- DOWNLOADS ----------
    d1, d2, d3 = st.columns(3)
    d1.download_button("Download Excel", data=export_workbook(result, store.entries()),
                       file_name=WORKBOOK_NAME,
                       mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    csv_name, csv_bytes = export_projection_csv(result)
    d2.download_button("Download CSV", data=csv_bytes, file_name=csv_name, mime="text/csv")
    d3.download_button("Download Report", data=generate_html_report(result, store.entries(), figure),
                       file_name="retirement_report.html", mime="text/html")


if __name__ == "__main__":
    main()
