from __future__ import annotations

import pandas as pd
import streamlit as st

from groomdash.data.filters import (
    AppointmentFilters,
    apply_appointment_filters,
    appointments_frame,
    appointments_per_day,
    export_appointments_csv,
    export_file_name,
    filter_options,
    summarize_appointments,
)
from groomdash.data.models import STATUS_BADGES, STATUS_LABELS
from groomdash.ui.components.charts import render_plotly, stacked_bar_chart
from groomdash.ui.components.kpi import KpiCard, render_kpi_cards
from groomdash.ui.pages.context import PageContext
from groomdash.utils.formatting import format_date, format_time

ALL_PET_TYPES = "All Pet Types"
ALL_SERVICES = "All Services"

DATE_KEY = "gd_apt_date"
PET_KEY = "gd_apt_pet_type"
SERVICE_KEY = "gd_apt_service"


def _clear_filters() -> None:
    st.session_state[DATE_KEY] = None
    st.session_state[PET_KEY] = ALL_PET_TYPES
    st.session_state[SERVICE_KEY] = ALL_SERVICES


def _select(label: str, all_label: str, options: list, key: str):
    choices = [all_label] + options
    # A previously selected value can disappear after a refresh.
    if st.session_state.get(key) not in choices:
        st.session_state[key] = all_label
    choice = st.selectbox(label, choices, key=key)
    return None if choice == all_label else choice


def _filters_ui(df: pd.DataFrame) -> AppointmentFilters:
    # Seed through session_state so Clear Filters can reset the widget to "no date".
    st.session_state.setdefault(DATE_KEY, None)
    col_date, col_pet, col_service = st.columns(3)
    with col_date:
        selected_date = st.date_input("📅 Date", key=DATE_KEY, format="MM/DD/YYYY")
    with col_pet:
        pet_type = _select("🐶 Pet Type", ALL_PET_TYPES, filter_options(df, "pet_type"), PET_KEY)
    with col_service:
        service = _select("✂️ Service", ALL_SERVICES, filter_options(df, "service_type"), SERVICE_KEY)
    return AppointmentFilters(date=selected_date, pet_type=pet_type, service_type=service)


def empty_state_message(df: pd.DataFrame, filters: AppointmentFilters) -> str:
    if df.empty:
        return "No appointments yet. New bookings will show up here after the next refresh."
    if filters.active:
        return "No appointments match the selected filters. Try adjusting or clearing them."
    return "No appointments found."


def _display_frame(df: pd.DataFrame, tz: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Owner & Pet": df["owner_name"] + " · " + df["pet_type"],
            "Service": df["service_type"],
            "Date": df["date_time"].apply(lambda v: format_date(v, tz)),
            "Time": df["date_time"].apply(lambda v: format_time(v, tz)),
            "Contact": df["contact_info"],
            "Status": df["status"].map(lambda s: f"{STATUS_BADGES.get(s, '⚪')} {STATUS_LABELS.get(s, s)}"),
        }
    )


def render(context: PageContext) -> None:
    tz = context.timezone
    df = appointments_frame(context.state.appointments)

    filters = _filters_ui(df)
    filtered = apply_appointment_filters(df, filters, tz)

    col_clear, col_export, _ = st.columns([1, 1, 4])
    with col_clear:
        st.button("Clear Filters", on_click=_clear_filters, disabled=not filters.active)
    with col_export:
        st.download_button(
            "⬇️ Export CSV",
            data=export_appointments_csv(filtered, tz),
            file_name=export_file_name(context.now, tz),
            mime="text/csv",
            type="primary",
        )

    summary = summarize_appointments(filtered, catalog=df)
    render_kpi_cards(
        [
            KpiCard("Total Appointments", summary.total, icon="📅"),
            KpiCard("Today's Appointments", summary.today, icon="⏰"),
            KpiCard("Upcoming", summary.upcoming, icon="👤"),
            KpiCard("Services Offered", summary.services, icon="✂️"),
        ],
        columns=4,
    )

    st.subheader(f"Appointments ({summary.total})")
    if filtered.empty:
        st.info(empty_state_message(df, filters))
        return

    per_day = appointments_per_day(filtered, tz)
    if per_day["date"].nunique() > 1:
        fig = stacked_bar_chart(
            per_day,
            x="date",
            y="appointments",
            color="service_type",
            yaxis_title="Appointments",
            legend_title="Service",
        )
        render_plotly(fig)

    st.dataframe(
        _display_frame(filtered.sort_values("date_time"), tz),
        use_container_width=True,
        hide_index=True,
    )
