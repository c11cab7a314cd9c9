from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from groomdash.state import DashboardState


@dataclass
class PageContext:
    state: DashboardState
    timezone: str
    now: pd.Timestamp
