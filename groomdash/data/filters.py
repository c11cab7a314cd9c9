"""
Filter, summary and export utilities for the appointment and customer views.

Views hold their own filter state; everything here is a pure function of the
normalized collections plus that state.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pandas as pd

from groomdash.data.models import STATUS_TODAY, STATUS_UPCOMING, Appointment, Customer
from groomdash.data.normalize import as_utc
from groomdash.utils.formatting import format_datetime

APPOINTMENT_COLUMNS = [
    "id",
    "owner_name",
    "pet_type",
    "service_type",
    "date_time",
    "contact_info",
    "status",
]
CUSTOMER_COLUMNS = [
    "id",
    "owner_name",
    "pet_type",
    "service_type",
    "preferred_date_time",
    "contact_info",
    "email",
    "notes",
]
CUSTOMER_SEARCH_COLUMNS = ["owner_name", "contact_info", "email", "pet_type"]

# Column order of the CSV export
EXPORT_COLUMNS = {
    "owner_name": "Owner Name",
    "pet_type": "Pet Type",
    "service_type": "Service Type",
    "date_time": "Date & Time",
    "contact_info": "Contact Info",
}


@dataclass
class AppointmentFilters:
    date: Optional[dt.date] = None
    pet_type: Optional[str] = None
    service_type: Optional[str] = None

    @property
    def active(self) -> bool:
        return any(v is not None for v in (self.date, self.pet_type, self.service_type))


@dataclass(frozen=True)
class AppointmentSummary:
    total: int
    today: int
    upcoming: int
    services: int


def appointments_frame(appointments: Sequence[Appointment]) -> pd.DataFrame:
    rows = [
        {
            "id": a.id,
            "owner_name": a.owner_name,
            "pet_type": a.pet_type,
            "service_type": a.service_type,
            "date_time": a.date_time,
            "contact_info": a.contact_info,
            "status": a.status,
        }
        for a in appointments
    ]
    df = pd.DataFrame(rows, columns=APPOINTMENT_COLUMNS)
    df["date_time"] = pd.to_datetime(df["date_time"], utc=True)
    return df


def customers_frame(customers: Sequence[Customer]) -> pd.DataFrame:
    rows = [c.to_dict() for c in customers]
    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=CUSTOMER_COLUMNS)
    return df.rename(
        columns={
            "ownerName": "owner_name",
            "petType": "pet_type",
            "serviceType": "service_type",
            "preferredDateTime": "preferred_date_time",
            "contactInfo": "contact_info",
        }
    )[CUSTOMER_COLUMNS]


def filter_options(df: pd.DataFrame, column: str) -> List[str]:
    if column not in df.columns or df.empty:
        return []
    values = df[column].dropna().astype(str)
    return sorted(v for v in values.unique() if v.strip())


def local_dates(df: pd.DataFrame, tz: str) -> pd.Series:
    return df["date_time"].dt.tz_convert(tz).dt.date


def apply_appointment_filters(
    df: pd.DataFrame,
    filters: AppointmentFilters,
    tz: str = "UTC",
) -> pd.DataFrame:
    if df.empty:
        return df
    filtered = df

    if filters.date is not None:
        filtered = filtered[local_dates(filtered, tz) == filters.date]

    if filters.pet_type:
        filtered = filtered[filtered["pet_type"] == filters.pet_type]

    if filters.service_type:
        filtered = filtered[filtered["service_type"] == filters.service_type]

    return filtered.copy()


def summarize_appointments(
    df: pd.DataFrame,
    catalog: Optional[pd.DataFrame] = None,
) -> AppointmentSummary:
    """
    Counts for the KPI cards. Totals follow ``df`` (the filtered rows); the
    number of services offered is taken from ``catalog`` (all appointments)
    when given.
    """
    catalog = df if catalog is None else catalog
    services = int(catalog["service_type"].nunique()) if not catalog.empty else 0
    if df.empty:
        return AppointmentSummary(total=0, today=0, upcoming=0, services=services)
    return AppointmentSummary(
        total=int(len(df)),
        today=int((df["status"] == STATUS_TODAY).sum()),
        upcoming=int((df["status"] == STATUS_UPCOMING).sum()),
        services=services,
    )


def export_appointments_csv(df: pd.DataFrame, tz: str = "UTC") -> bytes:
    export = pd.DataFrame(columns=list(EXPORT_COLUMNS.keys()))
    if not df.empty:
        export = df[list(EXPORT_COLUMNS.keys())].copy()
        export["date_time"] = export["date_time"].apply(lambda v: format_datetime(v, tz))
    export = export.rename(columns=EXPORT_COLUMNS)
    return export.to_csv(index=False, lineterminator="\n").encode("utf-8")


def export_file_name(now: pd.Timestamp, tz: str = "UTC") -> str:
    local = as_utc(now).tz_convert(tz)
    return f"appointments-{local.date().isoformat()}.csv"


def search_customers(df: pd.DataFrame, term: Optional[str]) -> pd.DataFrame:
    needle = (term or "").strip().lower()
    if not needle or df.empty:
        return df
    mask = pd.Series(False, index=df.index)
    for column in CUSTOMER_SEARCH_COLUMNS:
        if column in df:
            mask |= df[column].fillna("").astype(str).str.lower().str.contains(needle, regex=False)
    return df[mask]


def appointments_per_day(df: pd.DataFrame, tz: str = "UTC") -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=["date", "service_type", "appointments"])
    working = df.assign(date=local_dates(df, tz))
    return (
        working.groupby(["date", "service_type"])
        .size()
        .reset_index(name="appointments")
        .sort_values(["date", "service_type"])
    )
