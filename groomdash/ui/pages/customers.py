from __future__ import annotations

import pandas as pd
import streamlit as st

from groomdash.data.filters import customers_frame, search_customers
from groomdash.ui.pages.context import PageContext

SEARCH_KEY = "gd_customer_search"
TABLE_VIEW_KEY = "gd_customer_table_view"
CARDS_PER_ROW = 2

TABLE_COLUMNS = {
    "owner_name": "Owner",
    "pet_type": "Pet Type",
    "service_type": "Service",
    "preferred_date_time": "Preferred Time",
    "contact_info": "Contact",
    "email": "Email",
    "notes": "Notes",
}


def _render_card(customer: pd.Series) -> None:
    with st.container(border=True):
        st.markdown(f"#### 👤 {customer['owner_name'] or 'Unnamed customer'}")
        st.caption(f"🐾 {customer['pet_type'] or 'Unknown pet'}")
        st.markdown(f"📞 {customer['contact_info'] or '–'}  \n✉️ {customer['email'] or '–'}")
        st.markdown(
            "**Service Preferences**  \n"
            f"**Service:** {customer['service_type'] or '–'}  \n"
            f"**Preferred Time:** {customer['preferred_date_time'] or '–'}"
        )
        notes = customer.get("notes")
        if isinstance(notes, str) and notes:
            st.info(f"📝 **Notes**  \n{notes}")


def render(context: PageContext) -> None:
    df = customers_frame(context.state.customers)

    search = st.text_input(
        "🔍 Search",
        key=SEARCH_KEY,
        placeholder="Search by owner name, contact info, email or pet type...",
    )
    filtered = search_customers(df, search)
    st.caption(f"Showing {len(filtered)} of {len(df)} customers")

    if filtered.empty:
        hint = "Try adjusting your search term." if search.strip() else "No customers have been registered yet."
        st.info(f"No customers found. {hint}")
        return

    if st.toggle("Table view", key=TABLE_VIEW_KEY):
        st.dataframe(
            filtered[list(TABLE_COLUMNS)].rename(columns=TABLE_COLUMNS),
            use_container_width=True,
            hide_index=True,
        )
        return

    rows = [filtered.iloc[i: i + CARDS_PER_ROW] for i in range(0, len(filtered), CARDS_PER_ROW)]
    for row in rows:
        cols = st.columns(CARDS_PER_ROW)
        for col, (_, customer) in zip(cols, row.iterrows()):
            with col:
                _render_card(customer)
