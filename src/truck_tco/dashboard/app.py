"""Truck TCO Calculator — Streamlit dashboard.

Layout: sidebar form → main area with headline metrics, the annual cost
breakdown (donut + bar + table), export actions and saved calculations.
The form is persisted to the local store on every edit and restored on the
next visit.  Streamlit reruns the script on each edit, so the result on
screen always belongs to the current inputs.

Run with:
    streamlit run src/truck_tco/dashboard/app.py
"""

from __future__ import annotations

import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from truck_tco.config.inputs import DEFAULT_LOAN_SHARE
from truck_tco.config.settings import get_settings
from truck_tco.config.truck import TRUCK_PROFILES, TruckType
from truck_tco.engine.tco import DivisionUndefinedError, NonFiniteResultError, compute_tco
from truck_tco.engine.validation import InputField, InputValidationError, parse_inputs
from truck_tco.log import configure_logging
from truck_tco.report.files import export_filename, utc_now
from truck_tco.report.formatting import (
    category_color,
    category_label,
    format_currency,
    format_number,
    format_percentage,
)
from truck_tco.report.json_export import export_json
from truck_tco.report.pdf import generate_tco_report
from truck_tco.storage.form_state import load_form_data, save_form_data
from truck_tco.storage.history import CalculationHistory
from truck_tco.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

# ---------------------------------------------------------------------------
# Page config + storage
# ---------------------------------------------------------------------------
st.set_page_config(page_title=settings.app_name, page_icon="🚚", layout="wide")


@st.cache_resource
def _store() -> LocalStore:
    return LocalStore(settings.storage_dir)


store = _store()
store.refresh()
history = CalculationHistory(store, capacity=settings.history_capacity)
saved_form = load_form_data(store)

st.title(settings.app_name)
st.caption("Total Cost of Ownership for your truck fleet")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _optional_number(value) -> float | None:
    """Blank form values stay blank; anything else is passed through as a float."""
    if value in ("", None):
        return None
    return float(value)


def _field_error(errors: dict[InputField, str], field: InputField) -> None:
    if field in errors:
        st.sidebar.error(errors[field], icon="⚠️")


# ---------------------------------------------------------------------------
# SIDEBAR — Inputs
# ---------------------------------------------------------------------------
st.sidebar.header("Customer & Truck")

_TYPES = [t.value for t in TruckType]
customer_name = st.sidebar.text_input("Customer name *", saved_form["customer_name"],
                                      placeholder="e.g. Gonzalez Transport")
truck_type = st.sidebar.selectbox(
    "Truck type *", _TYPES,
    index=_TYPES.index(saved_form["truck_type"]) if saved_form["truck_type"] in _TYPES else 1,
    format_func=lambda t: TRUCK_PROFILES[TruckType(t)].name,
)
truck_value = st.sidebar.number_input("Truck value ($) *", value=float(saved_form["truck_value"]), step=1_000.0)
annual_distance = st.sidebar.number_input("Annual distance (km) *", value=float(saved_form["annual_distance"]),
                                          step=1_000.0)
operation_years = st.sidebar.number_input("Operation years *", value=int(saved_form["operation_years"]), step=1)

with st.sidebar.expander("Fuel", expanded=True):
    fuel_price = st.number_input("Fuel price ($/L) *", value=float(saved_form["fuel_price"]), step=0.5)
    use_custom = st.checkbox("Use measured fuel efficiency",
                             value=_optional_number(saved_form["custom_fuel_efficiency"]) is not None)
    custom_fuel_efficiency = ""
    if use_custom:
        custom_fuel_efficiency = st.number_input(
            "Fuel efficiency (km/L)",
            value=_optional_number(saved_form["custom_fuel_efficiency"])
            or TRUCK_PROFILES[TruckType(truck_type)].default_fuel_efficiency,
            step=0.1,
            help="Leave unchecked to use the truck profile default",
        )

with st.sidebar.expander("Financing"):
    has_financing = st.checkbox("Financed purchase", value=bool(saved_form["has_financing"]))
    loan_amount = ""
    interest_rate = float(saved_form["interest_rate"])
    if has_financing:
        saved_loan = _optional_number(saved_form["loan_amount"])
        loan_amount = st.number_input(
            "Loan amount ($)",
            value=truck_value * DEFAULT_LOAN_SHARE if saved_loan is None else saved_loan,
            step=1_000.0,
        )
        interest_rate = st.number_input("Annual interest rate", value=interest_rate, step=0.01, format="%.3f")

with st.sidebar.expander("Other operating costs"):
    toll_cost_per_distance = st.number_input("Tolls ($/km)", value=float(saved_form["toll_cost_per_distance"]),
                                             step=0.1)
    annual_license_cost = st.number_input("Licenses and permits ($/year)",
                                          value=float(saved_form["annual_license_cost"]), step=500.0)
    other_annual_costs = st.number_input("Other costs ($/year)", value=float(saved_form["other_annual_costs"]),
                                         step=500.0)

form_data = {
    "customer_name": customer_name,
    "truck_type": truck_type,
    "truck_value": truck_value,
    "annual_distance": annual_distance,
    "operation_years": int(operation_years),
    "fuel_price": fuel_price,
    "custom_fuel_efficiency": custom_fuel_efficiency,
    "has_financing": has_financing,
    "loan_amount": loan_amount,
    "interest_rate": interest_rate,
    "toll_cost_per_distance": toll_cost_per_distance,
    "annual_license_cost": annual_license_cost,
    "other_annual_costs": other_annual_costs,
}
if form_data != saved_form:
    save_form_data(store, form_data)

# ---------------------------------------------------------------------------
# Validate + compute
# ---------------------------------------------------------------------------
try:
    inputs = parse_inputs(form_data)
    errors: dict[InputField, str] = {}
except InputValidationError as exc:
    inputs = None
    errors = exc.errors

for field in InputField:
    _field_error(errors, field)

if inputs is None:
    st.info("Complete the highlighted fields in the sidebar to see the TCO.")
    st.stop()

try:
    result = compute_tco(inputs)
except (DivisionUndefinedError, NonFiniteResultError) as exc:
    logger.warning("Calculation rejected: %s", exc)
    st.error(f"These inputs cannot be calculated: {exc}")
    st.stop()

# ---------------------------------------------------------------------------
# Headline metrics
# ---------------------------------------------------------------------------
st.header(f"Total cost of ownership: {format_currency(result.total_period_cost)}")
st.caption(f"{inputs.operation_years} years of operation · {result.truck_profile.name} · "
           f"{format_number(result.fuel_efficiency_used, 1)} km/L")

m1, m2, m3, m4 = st.columns(4)
m1.metric("Annual cost", format_currency(result.total_annual_cost))
m2.metric("Cost per km", f"${result.cost_per_distance:,.2f}")
m3.metric("Cost per day", format_currency(result.cost_per_day))
m4.metric("Total distance", f"{format_number(result.total_distance)} km")

m1, m2, m3 = st.columns(3)
m1.metric("Initial investment", format_currency(result.initial_investment))
m2.metric("Total investment", format_currency(result.total_investment),
          help="Truck value + total operating cost over the period")
m3.metric("Operating cost vs truck value", format_percentage(result.roi_percent),
          help="(total period cost / truck value) × 100")

# ---------------------------------------------------------------------------
# Breakdown
# ---------------------------------------------------------------------------
st.divider()
st.subheader("Annual cost breakdown")

labels = [category_label(e.category) for e in result.cost_breakdown]
colors = [category_color(e.category) for e in result.cost_breakdown]
amounts = [e.amount for e in result.cost_breakdown]

col_donut, col_bar = st.columns(2)
with col_donut:
    fig_donut = go.Figure(go.Pie(
        labels=labels, values=amounts, hole=0.55,
        marker=dict(colors=colors), sort=False,
        hovertemplate="%{label}<br>$%{value:,.0f}<br>%{percent}<extra></extra>",
    ))
    fig_donut.update_layout(height=360, margin=dict(t=10, b=10, l=10, r=10), showlegend=False)
    st.plotly_chart(fig_donut, use_container_width=True)

with col_bar:
    fig_bar = go.Figure(go.Bar(
        x=amounts[::-1], y=labels[::-1], orientation="h",
        marker_color=colors[::-1],
        hovertemplate="%{y}: $%{x:,.0f}<extra></extra>",
    ))
    fig_bar.update_layout(height=360, margin=dict(t=10, b=10, l=10, r=10), xaxis_title="$ / year")
    st.plotly_chart(fig_bar, use_container_width=True)

breakdown_df = pd.DataFrame({
    "Category": labels,
    "Annual cost": [format_currency(a) for a in amounts],
    "Share": [format_percentage(e.percentage) for e in result.cost_breakdown],
})
total_row = pd.DataFrame({
    "Category": ["Total annual cost"],
    "Annual cost": [format_currency(result.total_annual_cost)],
    "Share": ["100.0%"],
})
st.dataframe(pd.concat([breakdown_df, total_row], ignore_index=True), hide_index=True, use_container_width=True)

with st.expander("Show formulas"):
    costs = result.annual_costs
    profile = result.truck_profile
    st.markdown(f"**Depreciation** — `truck_value × rate` = {format_currency(inputs.truck_value)} × "
                f"{profile.depreciation_rate} = **{format_currency(costs.depreciation)}**")
    st.markdown(f"**Fuel** — `(km / km_per_L) × price` = ({format_number(inputs.annual_distance)} / "
                f"{result.fuel_efficiency_used}) × {inputs.fuel_price} = **{format_currency(costs.fuel)}**")
    st.markdown(f"**Maintenance** — `km × cost_per_km` = {format_number(inputs.annual_distance)} × "
                f"{profile.maintenance_cost_per_distance} = **{format_currency(costs.maintenance)}**")
    st.markdown(f"**Tires** — `(km / 100,000) × cost_per_100k` = **{format_currency(costs.tires)}**")
    st.markdown(f"**Insurance** — `truck_value × rate` = {format_currency(inputs.truck_value)} × "
                f"{profile.insurance_rate} = **{format_currency(costs.insurance)}**")

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------
st.divider()
a1, a2, a3 = st.columns(3)

if a1.button("💾  Save calculation", use_container_width=True):
    saved = history.save(inputs, result)
    st.toast(f"Saved calculation for {saved.customer_name}", icon="✅")

now = utc_now()
try:
    pdf_bytes = generate_tco_report(inputs, result, generated_at=now)
except (RuntimeError, ValueError):
    logger.exception("PDF generation failed")
    pdf_bytes = None
    st.toast("Could not generate the PDF report", icon="❌")
if pdf_bytes is not None:
    a2.download_button(
        "📄  Download PDF report",
        data=pdf_bytes,
        file_name=export_filename(inputs.customer_name, "pdf", now),
        mime="application/pdf",
        use_container_width=True,
    )

a3.download_button(
    "🧾  Export JSON",
    data=export_json(inputs, result, now=now),
    file_name=export_filename(inputs.customer_name, "json", now),
    mime="application/json",
    use_container_width=True,
)

# ---------------------------------------------------------------------------
# Saved calculations
# ---------------------------------------------------------------------------
entries = history.entries()
with st.expander(f"Saved calculations ({len(entries)})"):
    if entries:
        st.dataframe(pd.DataFrame([{
            "Saved": e.timestamp,
            "Customer": e.customer_name,
            "Truck": e.results.truck_profile.name,
            "Annual cost": format_currency(e.results.total_annual_cost),
            "Total cost": format_currency(e.results.total_period_cost),
            "Cost per km": f"${e.results.cost_per_distance:,.2f}",
        } for e in entries]), hide_index=True, use_container_width=True)
        if st.button("Clear history"):
            history.clear()
            st.rerun()
    else:
        st.caption("No saved calculations yet.")
