import groomdash.bootstrap_env  # must be first to set env/secrets
import pandas as pd
import streamlit as st

from groomdash.config import TABS, get_settings
from groomdash.errors import ConfigError
from groomdash.logging_config import configure_logging
from groomdash.state import DashboardController, build_controller
from groomdash.ui.layout import (
    render_error_banner,
    render_header,
    setup_page,
    sidebar_refresh_controls,
    start_auto_refresh,
)
from groomdash.ui.pages import appointments, customers
from groomdash.ui.pages.context import PageContext

CONTROLLER_KEY = "gd_controller"

PAGE_RENDERERS = {
    "appointments": appointments.render,
    "customers": customers.render,
}


def _get_controller(settings) -> DashboardController:
    controller = st.session_state.get(CONTROLLER_KEY)
    if controller is None:
        controller = build_controller(settings)
        st.session_state[CONTROLLER_KEY] = controller
    return controller


def main() -> None:
    setup_page()
    try:
        settings = get_settings()
    except ConfigError as exc:
        st.error(f"Configuration error: {exc}", icon="🚨")
        return
    configure_logging(settings.log_level)

    controller = _get_controller(settings)

    if sidebar_refresh_controls(controller):
        with st.spinner("Refreshing data..."):
            controller.refresh()
    elif controller.is_due():
        with st.spinner("Loading appointments..."):
            controller.refresh_if_due()

    state = controller.state
    render_header(state, settings.timezone)
    render_error_banner(state)

    context = PageContext(
        state=state,
        timezone=settings.timezone,
        now=pd.Timestamp.now(tz="UTC"),
    )

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(context)

    start_auto_refresh(controller)


if __name__ == "__main__":
    main()
