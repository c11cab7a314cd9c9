"""
Normalization of loosely shaped webhook records into typed appointments and
customers.

Every field accepts several key spellings (camel-case, snake-case and, for the
contact field, a bare ``phone``). The first present, non-empty value wins.
Appointment status is derived here, at ingestion time, from the appointment
instant and the local calendar day that contains ``now``.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from groomdash.data.models import (
    STATUS_COMPLETED,
    STATUS_TODAY,
    STATUS_UPCOMING,
    Appointment,
    Customer,
    Status,
)
from groomdash.errors import PayloadError, RecordError

logger = logging.getLogger(__name__)

CONTACT_ALIASES: Tuple[str, ...] = ("contactInfo", "contact_info", "phone")

APPOINTMENT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "owner_name": ("ownerName", "owner_name"),
    "pet_type": ("petType", "pet_type"),
    "service_type": ("serviceType", "service_type"),
    "date_time": ("dateTime", "date_time"),
    "contact_info": CONTACT_ALIASES,
}

CUSTOMER_FIELDS: Dict[str, Tuple[str, ...]] = {
    "id": ("id",),
    "owner_name": ("ownerName", "owner_name"),
    "pet_type": ("petType", "pet_type"),
    "service_type": ("serviceType", "service_type"),
    "preferred_date_time": ("preferredDateTime", "preferred_date_time"),
    "contact_info": CONTACT_ALIASES,
    "email": ("email",),
    "notes": ("notes",),
}

# pandas reads these as the wall clock, which would bypass the cycle's ``now``.
RELATIVE_DATE_WORDS = frozenset({"now", "today"})


@dataclass
class NormalizedPayload:
    appointments: List[Appointment] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    skipped: int = 0


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dict, list, tuple, set)):
        return None
    text = value.strip() if isinstance(value, str) else str(value).strip()
    return text or None


def resolve_field(record: Mapping[str, Any], aliases: Sequence[str], default: str = "") -> str:
    """Return the first present, non-empty value among ``aliases``."""
    for alias in aliases:
        if alias not in record:
            continue
        cleaned = _clean(record[alias])
        if cleaned is not None:
            return cleaned
    return default


def placeholder_id(kind: str, index: int) -> str:
    return f"{kind}-{index + 1}"


def as_utc(value: pd.Timestamp) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def parse_instant(value: Any) -> pd.Timestamp:
    """Parse an ISO-8601 value into a UTC timestamp; naive values are taken as UTC."""
    if isinstance(value, str) and value.strip().lower() in RELATIVE_DATE_WORDS:
        raise RecordError(f"Invalid date-time value: {value!r}")
    try:
        parsed = pd.to_datetime(value, utc=True)
    except (TypeError, ValueError) as exc:
        raise RecordError(f"Invalid date-time value: {value!r}", cause=exc) from exc
    if not isinstance(parsed, pd.Timestamp) or pd.isna(parsed):
        raise RecordError(f"Invalid date-time value: {value!r}")
    return parsed


def _local_midnight(day: dt.date, tz: str) -> pd.Timestamp:
    naive = pd.Timestamp(year=day.year, month=day.month, day=day.day)
    return naive.tz_localize(tz, ambiguous=True, nonexistent="shift_forward")


def day_bounds(now: pd.Timestamp, tz: str) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Start and end (exclusive) of the local calendar day containing ``now``, in UTC."""
    local_day = as_utc(now).tz_convert(tz).date()
    start = _local_midnight(local_day, tz)
    end = _local_midnight(local_day + dt.timedelta(days=1), tz)
    return start.tz_convert("UTC"), end.tz_convert("UTC")


def derive_status(date_time: pd.Timestamp, now: pd.Timestamp, tz: str = "UTC") -> Status:
    today_start, today_end = day_bounds(now, tz)
    instant = as_utc(date_time)
    if today_start <= instant < today_end:
        return STATUS_TODAY
    if instant < today_start:
        return STATUS_COMPLETED
    return STATUS_UPCOMING


def normalize_appointment(
    record: Any,
    index: int,
    now: pd.Timestamp,
    tz: str = "UTC",
) -> Appointment:
    if not isinstance(record, Mapping):
        raise RecordError(f"Appointment #{index + 1} is not an object")

    aliases = APPOINTMENT_FIELDS
    raw_date = resolve_field(record, aliases["date_time"])
    date_time = parse_instant(raw_date) if raw_date else as_utc(now)

    return Appointment(
        id=resolve_field(record, aliases["id"]) or placeholder_id("appointment", index),
        owner_name=resolve_field(record, aliases["owner_name"]),
        pet_type=resolve_field(record, aliases["pet_type"]),
        service_type=resolve_field(record, aliases["service_type"]),
        date_time=date_time,
        contact_info=resolve_field(record, aliases["contact_info"]),
        status=derive_status(date_time, now, tz),
    )


def normalize_customer(record: Any, index: int) -> Customer:
    if not isinstance(record, Mapping):
        raise RecordError(f"Customer #{index + 1} is not an object")

    aliases = CUSTOMER_FIELDS
    return Customer(
        id=resolve_field(record, aliases["id"]) or placeholder_id("customer", index),
        owner_name=resolve_field(record, aliases["owner_name"]),
        pet_type=resolve_field(record, aliases["pet_type"]),
        service_type=resolve_field(record, aliases["service_type"]),
        preferred_date_time=resolve_field(record, aliases["preferred_date_time"]),
        contact_info=resolve_field(record, aliases["contact_info"]),
        email=resolve_field(record, aliases["email"]),
        notes=resolve_field(record, aliases["notes"]) or None,
    )


def _records(payload: Mapping[str, Any], key: str) -> List[Any]:
    raw = payload.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PayloadError(f"Expected '{key}' to be an array, got {type(raw).__name__}")
    return raw


def normalize_payload(payload: Any, now: pd.Timestamp, tz: str = "UTC") -> NormalizedPayload:
    """Coerce a decoded webhook response into typed collections.

    Raises PayloadError when the top-level shape is wrong. Individual records
    that fail validation are skipped and counted.
    """
    if not isinstance(payload, Mapping):
        raise PayloadError(f"Expected a JSON object, got {type(payload).__name__}")

    result = NormalizedPayload()
    for index, record in enumerate(_records(payload, "appointments")):
        try:
            result.appointments.append(normalize_appointment(record, index, now, tz))
        except RecordError as exc:
            result.skipped += 1
            logger.warning("Skipping appointment record: %s", exc)

    for index, record in enumerate(_records(payload, "customers")):
        try:
            result.customers.append(normalize_customer(record, index))
        except RecordError as exc:
            result.skipped += 1
            logger.warning("Skipping customer record: %s", exc)

    return result
