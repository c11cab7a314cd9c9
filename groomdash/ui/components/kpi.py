from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import streamlit as st

from groomdash.utils.formatting import format_count


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    icon: Optional[str] = None
    help_text: Optional[str] = None


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                label = f"{card.icon} {card.label}" if card.icon else card.label
                st.metric(label=label, value=format_count(card.value), help=card.help_text)
