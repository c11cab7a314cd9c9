"""
HTTP access to the automation webhook that serves appointments and customers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import pandas as pd
import requests

from groomdash.data.normalize import as_utc
from groomdash.data.sample import sample_payload
from groomdash.errors import PayloadError, ResponseStatusError, TransportError

logger = logging.getLogger(__name__)

REQUEST_ACTION = "get_data"
DEFAULT_TIMEOUT = 15.0


def build_request_body(now: pd.Timestamp) -> Dict[str, str]:
    return {
        "action": REQUEST_ACTION,
        "timestamp": as_utc(now).isoformat().replace("+00:00", "Z"),
    }


class WebhookClient:
    """POSTs a timestamped ``get_data`` request and returns the decoded JSON."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, now: pd.Timestamp) -> Any:
        body = build_request_body(now)
        logger.debug("POST %s %s", self.url, body)
        try:
            response = self._session.post(
                self.url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Unable to reach webhook: {exc}", cause=exc) from exc

        if not 200 <= response.status_code < 300:
            reason = f" {response.reason}" if response.reason else ""
            raise ResponseStatusError(
                f"Webhook returned HTTP {response.status_code}{reason}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise PayloadError(f"Webhook returned invalid JSON: {exc}", cause=exc) from exc


class SampleClient:
    """Serves the built-in sample payload instead of calling the webhook."""

    url = "sample://fluffy-friends"

    def fetch(self, now: pd.Timestamp) -> Any:
        return sample_payload(now)
