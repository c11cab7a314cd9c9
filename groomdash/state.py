"""
Ingestion cycle and the state container the views read from.

A ``DashboardController`` lives in ``st.session_state`` for the lifetime of a
browser session. Each cycle either replaces both collections or clears them;
there is no partial success and no merging.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

import pandas as pd

from groomdash.config import Settings
from groomdash.data.client import SampleClient, WebhookClient
from groomdash.data.models import Appointment, Customer
from groomdash.data.normalize import as_utc, normalize_payload
from groomdash.errors import ConfigError, FetchError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to fetch data"


class PayloadSource(Protocol):
    url: Optional[str]

    def fetch(self, now: pd.Timestamp) -> Any:
        ...


class MissingWebhookSource:
    """Stand-in source used when no webhook URL is configured."""

    url = None

    def fetch(self, now: pd.Timestamp) -> Any:
        raise ConfigError("WEBHOOK_URL is not configured")


@dataclass
class DashboardState:
    appointments: List[Appointment] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    error: Optional[str] = None
    is_refreshing: bool = False
    last_updated: Optional[pd.Timestamp] = None
    last_attempt: Optional[pd.Timestamp] = None
    skipped_records: int = 0


def format_error(exc: BaseException) -> str:
    return f"{ERROR_PREFIX}: {exc}"


class DashboardController:
    def __init__(
        self,
        source: PayloadSource,
        *,
        timezone: str = "UTC",
        refresh_interval: float = 300,
    ) -> None:
        self.source = source
        self.timezone = timezone
        self.refresh_interval = pd.Timedelta(seconds=refresh_interval)
        self.state = DashboardState()
        self._in_flight = threading.Lock()

    def is_due(self, now: Optional[pd.Timestamp] = None) -> bool:
        last = self.state.last_attempt
        if last is None:
            return True
        now = as_utc(now) if now is not None else pd.Timestamp.now(tz="UTC")
        return now - last >= self.refresh_interval

    def refresh_if_due(self, now: Optional[pd.Timestamp] = None) -> bool:
        if not self.is_due(now):
            return False
        return self.refresh(now)

    def refresh(self, now: Optional[pd.Timestamp] = None) -> bool:
        """Run one ingestion cycle. Returns False when another cycle is still in flight."""
        if not self._in_flight.acquire(blocking=False):
            logger.info("Refresh skipped: a cycle is already in flight")
            return False
        try:
            self._run_cycle(as_utc(now) if now is not None else pd.Timestamp.now(tz="UTC"))
        finally:
            self._in_flight.release()
        return True

    def _run_cycle(self, now: pd.Timestamp) -> None:
        state = self.state
        state.is_refreshing = True
        state.last_attempt = now
        try:
            self._ingest(now)
        finally:
            state.is_refreshing = False

    def _ingest(self, now: pd.Timestamp) -> None:
        state = self.state
        logger.info("Fetching dashboard data from %s", self.source.url or "<unset>")
        try:
            payload = self.source.fetch(now)
            normalized = normalize_payload(payload, now, self.timezone)
        except (FetchError, ConfigError) as exc:
            logger.exception("Ingestion cycle failed")
            state.appointments = []
            state.customers = []
            state.skipped_records = 0
            state.error = format_error(exc)
            return

        state.appointments = normalized.appointments
        state.customers = normalized.customers
        state.skipped_records = normalized.skipped
        state.error = None
        state.last_updated = now
        logger.info(
            "Loaded %d appointments and %d customers (%d skipped)",
            len(normalized.appointments),
            len(normalized.customers),
            normalized.skipped,
        )


def build_controller(settings: Settings) -> DashboardController:
    if settings.use_sample_data:
        source: PayloadSource = SampleClient()
    elif settings.webhook_url:
        source = WebhookClient(settings.webhook_url, timeout=settings.request_timeout)
    else:
        source = MissingWebhookSource()
    return DashboardController(
        source,
        timezone=settings.timezone,
        refresh_interval=settings.refresh_interval,
    )
