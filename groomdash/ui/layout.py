"""
Layout helpers for the Streamlit application (page config, header, refresh controls).
"""

from __future__ import annotations

import streamlit as st

from groomdash.config import BUSINESS_NAME
from groomdash.state import DashboardController, DashboardState
from groomdash.utils.formatting import format_time

REFRESH_BUTTON_KEY = "gd_manual_refresh"


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title=f"{BUSINESS_NAME} • Appointments",
        layout="wide",
        page_icon="✂️",
    )
    _inject_brand_styles()


def _last_updated_text(state: DashboardState, tz: str) -> str:
    if state.last_updated is None:
        return "🕒 Last updated: never"
    return f"🕒 Last updated: {format_time(state.last_updated, tz, seconds=True)}"


def render_header(state: DashboardState, tz: str) -> None:
    title_col, status_col = st.columns([3, 1])
    with title_col:
        st.title(f"🐾 {BUSINESS_NAME}")
        st.caption("Appointment Dashboard")
    with status_col:
        st.caption(_last_updated_text(state, tz))
        if state.error:
            st.caption(f":red[⚠️ {state.error}]")


def render_error_banner(state: DashboardState) -> None:
    if state.error:
        st.error(state.error, icon="🚨")


def sidebar_refresh_controls(controller: DashboardController) -> bool:
    """Render the manual refresh button; returns True when it was clicked."""
    st.sidebar.header("Data")
    # Cycles run synchronously inside a spinner, so the button never renders mid-cycle.
    clicked = st.sidebar.button("🔄 Refresh Data", key=REFRESH_BUTTON_KEY)
    minutes = controller.refresh_interval.total_seconds() / 60
    st.sidebar.caption(f"Auto-refresh every {minutes:g} minutes.")
    if controller.state.skipped_records:
        st.sidebar.caption(
            f"{controller.state.skipped_records} malformed record(s) skipped in the last refresh."
        )
    return clicked


def start_auto_refresh(controller: DashboardController) -> None:
    """Tick on the refresh interval and rerun the whole app when a cycle ran."""
    interval = controller.refresh_interval.total_seconds()

    @st.fragment(run_every=interval)
    def _auto_refresh_ticker() -> None:
        if controller.refresh_if_due():
            st.rerun()

    _auto_refresh_ticker()


def _inject_brand_styles() -> None:
    """Tint the tab underline and primary buttons with the brand teal."""
    st.markdown(
        """
        <style>
        div[data-baseweb="tab-highlight"] {
            background-color: #0d9488 !important;
        }
        button[kind="primary"],
        button[data-testid="baseButton-primary"] {
            background-color: #0d9488 !important;
            border-color: #0d9488 !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
