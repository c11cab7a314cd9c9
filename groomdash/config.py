"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
import streamlit as st

from groomdash.errors import ConfigError

BUSINESS_NAME = "Fluffy Friends Spa"
DEFAULT_REFRESH_INTERVAL = 300
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_TIMEZONE = "UTC"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("appointments", "📅 Booked Appointments"),
    TabConfig("customers", "👥 Customer Details"),
]


@dataclass(frozen=True)
class Settings:
    webhook_url: Optional[str]
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    timezone: str = DEFAULT_TIMEZONE
    use_sample_data: bool = False
    log_level: str = "INFO"


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except (FileNotFoundError, KeyError, RuntimeError):
        pass
    return default


def _parse_positive(name: str, raw: Optional[str], default: float) -> float:
    if raw is None or not str(raw).strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}", cause=exc) from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _parse_bool(raw: Optional[str]) -> bool:
    return str(raw or "").strip().lower() in _TRUTHY


def _validate_timezone(name: str) -> str:
    try:
        pd.Timestamp.now(tz=name)
    except Exception as exc:  # pytz / zoneinfo raise different types for unknown zones
        raise ConfigError(f"Unknown DASHBOARD_TIMEZONE {name!r}", cause=exc) from exc
    return name


def get_settings() -> Settings:
    """Resolve dashboard settings from the environment and st.secrets."""
    webhook_url = (_get_secret("WEBHOOK_URL") or "").strip() or None
    refresh_interval = _parse_positive(
        "REFRESH_INTERVAL_SECONDS",
        _get_secret("REFRESH_INTERVAL_SECONDS"),
        DEFAULT_REFRESH_INTERVAL,
    )
    request_timeout = _parse_positive(
        "REQUEST_TIMEOUT_SECONDS",
        _get_secret("REQUEST_TIMEOUT_SECONDS"),
        DEFAULT_REQUEST_TIMEOUT,
    )
    timezone = _validate_timezone(
        (_get_secret("DASHBOARD_TIMEZONE") or DEFAULT_TIMEZONE).strip()
    )
    return Settings(
        webhook_url=webhook_url,
        refresh_interval=int(refresh_interval),
        request_timeout=request_timeout,
        timezone=timezone,
        use_sample_data=_parse_bool(_get_secret("USE_SAMPLE_DATA")),
        log_level=(_get_secret("LOG_LEVEL") or "INFO").upper(),
    )
