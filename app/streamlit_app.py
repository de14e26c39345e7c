"""
Net Worth Planner: advisor dashboard
====================================

Per client:
  1. Latest snapshot totals and input validation
  2. Assumptions: portfolio return, per-security returns, minimum liquidity
  3. Historical + 10-year projection chart and table
  4. Per-period overrides, with "reset future plan"

Edits live in the session only; the client file is read, never written.

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import ProjectionConfig
from core.logging import setup_logging
from core.schema import AssetType, EXTERNAL_COLUMN_PREFIX

from data_prep.loader import load_clients
from data_prep.reducer import snapshot_totals
from data_prep.validators import validate_plan, validate_snapshots

from engine.points import Projection
from engine.runner import run_projection

from models.client import Client
from models.plan import PlanData, SCALAR_OVERRIDE_FIELDS

from plan.liquidity import liquidity_alerts
from plan.overrides import (
    future_overrides,
    reset_future_plan,
    set_external_override,
    set_override_field,
)

DEFAULT_CLIENTS_FILE = PROJECT_ROOT / "data" / "clients.json"
CONFIG = ProjectionConfig()

FIELD_LABELS = {
    "change": "Vers./Prel. Extra",
    "savings": "Risparmio Sem.",
    "consultant_liquidity_override": "Liq. Consulenza",
    "portfolio_override": "Valore Portafoglio",
}

TABLE_LABELS = {
    "label": "Data",
    "period_savings": "Risparmio Sem.",
    "period_change": "Vers./Prel. Extra",
    "general_liquidity": "Liq. Generale",
    "consultant_liquidity": "Liq. Consulenza",
    "portfolio_value": "Valore Portafoglio",
    "rendimenti": "Rendimenti Cum.",
    "capitale_totale": "Cap. Totale",
}


# ---------------------------------------------------------------------------
# Cached loaders
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner="Loading clients...")
def _load_clients(path: str) -> list:
    return load_clients(path)


@st.cache_data(show_spinner=False)
def _project(client_json: str, plan_json: str) -> Projection:
    """Cache keyed on the JSON payloads, so any edit invalidates it."""
    client = Client.model_validate_json(client_json)
    plan = PlanData.model_validate_json(plan_json)
    return run_projection(client.appointments, plan.overrides, plan, CONFIG)


def _project_for(client: Client, plan: PlanData) -> Projection:
    return _project(client.model_dump_json(by_alias=True), plan.model_dump_json(by_alias=True))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
def _fmt_eur(val) -> str:
    return f"€ {val:,.0f}".replace(",", ".")


def _plan_for(client: Client) -> PlanData:
    key = f"plan::{client.id}"
    if key not in st.session_state:
        st.session_state[key] = client.plan_data
    return st.session_state[key]


def _save_plan(client: Client, plan: PlanData) -> None:
    st.session_state[f"plan::{client.id}"] = plan


# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------
def _plot_projection(df: pd.DataFrame, start_index: int, height: int = 460) -> None:
    if len(df) == 0:
        st.info("No data to plot.")
        return
    fig = go.Figure()
    stacks = [
        ("general_liquidity", "Liquidità Generale"),
        ("consultant_liquidity", "Liquidità Consulenza"),
        ("external_total", "Capitale Mobiliare"),
        ("capitale_versato", "Capitale Versato"),
        ("rendimenti", "Rendimenti"),
    ]
    for col, name in stacks:
        fig.add_trace(go.Scatter(x=df["date"], y=df[col], name=name, stackgroup="one", mode="lines"))
    fig.add_trace(
        go.Scatter(x=df["date"], y=df["capitale_totale"], name="Capitale Totale",
                   mode="lines", line=dict(dash="dot", color="black"))
    )
    if 0 < start_index <= len(df):
        today = df["date"].iloc[start_index - 1]
        fig.add_shape(type="line", x0=today, x1=today, y0=0, y1=1, yref="paper",
                      line=dict(dash="dash", color="gray"))
        fig.add_annotation(x=today, y=1, yref="paper", text="Oggi", showarrow=False, yanchor="bottom")
    fig.update_layout(height=height, yaxis_tickformat=",.0f", legend_orientation="h")
    st.plotly_chart(fig, use_container_width=True)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
def _render_snapshot_summary(client: Client) -> None:
    latest = client.latest_appointment()
    totals = snapshot_totals(latest)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Patrimonio Netto", _fmt_eur(totals.total_assets))
    c2.metric("Escluso Immobili", _fmt_eur(totals.total_assets_excluding_property))
    c3.metric("Previdenza", _fmt_eur(totals.total_pensions))
    c4.metric("Risparmio Annuo", _fmt_eur(totals.annual_savings))


def _render_assumptions(client: Client, plan: PlanData) -> PlanData:
    latest = client.latest_appointment()
    col1, col2 = st.columns(2)
    with col1:
        annual_return = st.number_input(
            "Rend. Medio Annuo Portafoglio Consulenza (%)",
            min_value=-100.0, value=float(plan.annual_return), step=0.5,
        )
        ext_returns = dict(plan.external_asset_returns)
        for asset in latest.assets_of(AssetType.EXTERNAL_SECURITIES):
            ext_returns[asset.id] = st.number_input(
                f"Rend. {asset.description} ({asset.details}) (%)",
                min_value=-100.0, value=float(ext_returns.get(asset.id, 0.0)), step=0.5,
                key=f"ext-return-{client.id}-{asset.id}",
            )
    with col2:
        min_liquidity = st.number_input(
            "Liquidità Minima di Emergenza (€)",
            min_value=0.0, value=float(plan.min_liquidity), step=1000.0,
        )
    return plan.model_copy(update={
        "annual_return": annual_return,
        "min_liquidity": min_liquidity,
        "external_asset_returns": ext_returns,
    })


def _render_override_editor(client: Client, plan: PlanData, projection: Projection) -> PlanData:
    historical = client.sorted_appointments()
    period_ids = [p.period_id for p in projection]
    labels = {p.period_id: f"{p.label} ({p.period_id})" for p in projection}

    # the first snapshot has no predecessor, so nothing there can be overridden
    period_id = st.selectbox("Periodo", period_ids[1:], format_func=labels.get)
    if not period_id:
        return plan
    is_future = CONFIG.is_future_period_id(period_id)
    fields = list(SCALAR_OVERRIDE_FIELDS) if is_future else ["change"]
    externals = [a.id for a in historical[-1].assets_of(AssetType.EXTERNAL_SECURITIES)] if is_future else []

    with st.form("override-editor"):
        target = st.selectbox(
            "Campo", fields + [f"{EXTERNAL_COLUMN_PREFIX}{a}" for a in externals],
            format_func=lambda f: FIELD_LABELS.get(f, f),
        )
        raw = st.text_input("Valore (vuoto per rimuovere)")
        submitted = st.form_submit_button("Applica")

    if submitted:
        if target.startswith(EXTERNAL_COLUMN_PREFIX):
            asset_id = target[len(EXTERNAL_COLUMN_PREFIX):]
            overrides = set_external_override(plan.overrides, period_id, asset_id, raw)
        else:
            overrides = set_override_field(plan.overrides, period_id, target, raw)
        plan = plan.model_copy(update={"overrides": overrides})

    n_future = len(future_overrides(plan.overrides, CONFIG))
    if st.button(f"Reset Piano Futuro ({n_future} modifiche)", disabled=n_future == 0):
        plan = plan.model_copy(update={
            "overrides": reset_future_plan(plan.overrides, client.historical_ids()),
        })
    return plan


def _render_table(df: pd.DataFrame) -> None:
    ext_cols = [c for c in df.columns if c.startswith(EXTERNAL_COLUMN_PREFIX)]
    view = df[list(TABLE_LABELS) + ext_cols].rename(columns=TABLE_LABELS)
    money_cols = [c for c in view.columns if c != "Data"]
    st.dataframe(view.style.format({c: _fmt_eur for c in money_cols}), use_container_width=True)
    st.download_button(
        "Scarica CSV",
        df.to_csv(index=False).encode("utf-8"),
        file_name="piano.csv",
        mime="text/csv",
    )


def main() -> None:
    setup_logging()
    st.set_page_config(page_title="Net Worth Planner", layout="wide")
    st.title("Pianificazione Storica e Futura")

    path = st.sidebar.text_input(
        "Client file", os.environ.get("NETWORTH_CLIENTS_FILE", str(DEFAULT_CLIENTS_FILE))
    )
    if not Path(path).exists():
        st.warning(f"File not found: {path}")
        return
    clients = _load_clients(path)
    if not clients:
        st.info("No clients in file.")
        return

    by_id = {c.id: c for c in clients}
    client_id = st.sidebar.selectbox("Cliente", list(by_id), format_func=lambda cid: by_id[cid].name)
    client = by_id[client_id]

    if not client.appointments:
        st.info("Nessun appuntamento disponibile per la pianificazione.")
        return

    plan = _plan_for(client)

    st.subheader("Ultimo appuntamento")
    _render_snapshot_summary(client)

    checks = [validate_snapshots(client.appointments), validate_plan(plan, client.appointments, config=CONFIG)]
    with st.expander("Data checks", expanded=any(not r.is_valid for r in checks)):
        for result in checks:
            st.text(result.summary())

    st.subheader("Ipotesi")
    plan = _render_assumptions(client, plan)

    projection = _project_for(client, plan)

    st.subheader("Modifiche per periodo")
    plan = _render_override_editor(client, plan, projection)
    _save_plan(client, plan)
    projection = _project_for(client, plan)

    df = projection.to_frame()
    _plot_projection(df, projection.projection_start_index)

    alerts = liquidity_alerts(projection, plan.min_liquidity)
    if len(alerts) > 0:
        st.warning(f"{len(alerts)} periodi sotto la liquidità minima o con prelievi non coperti.")
        st.dataframe(alerts, use_container_width=True)

    _render_table(df)


if __name__ == "__main__":
    main()
