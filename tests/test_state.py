from typing import Any, List

import pandas as pd
import pytest

from groomdash.config import Settings
from groomdash.data.client import SampleClient, WebhookClient
from groomdash.errors import ResponseStatusError, TransportError
from groomdash.state import DashboardController, MissingWebhookSource, build_controller


class ScriptedSource:
    """Source double that replays payloads or raises queued exceptions."""

    url = "https://automation.example.com/webhook"

    def __init__(self, *responses: Any) -> None:
        self.responses: List[Any] = list(responses)
        self.calls = 0
        self.on_fetch = None

    def fetch(self, now: pd.Timestamp) -> Any:
        self.calls += 1
        if self.on_fetch is not None:
            self.on_fetch()
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


FIRST_PAYLOAD = {
    "appointments": [
        {"id": "a1", "ownerName": "Sarah", "dateTime": "2024-01-01T15:00:00Z"},
        {"id": "a2", "ownerName": "Mike", "dateTime": "2024-01-05T15:00:00Z"},
    ],
    "customers": [{"id": "c1", "ownerName": "Sarah", "email": "sarah@example.com"}],
}
SECOND_PAYLOAD = {
    "appointments": [{"id": "a3", "owner_name": "Emily", "date_time": "2023-12-30T10:00:00Z"}],
}


def test_success_populates_collections(now: pd.Timestamp) -> None:
    controller = DashboardController(ScriptedSource(FIRST_PAYLOAD))

    assert controller.refresh(now) is True

    state = controller.state
    assert [a.id for a in state.appointments] == ["a1", "a2"]
    assert [a.status for a in state.appointments] == ["today", "upcoming"]
    assert [c.id for c in state.customers] == ["c1"]
    assert state.error is None
    assert state.last_updated == now
    assert state.is_refreshing is False


def test_failure_clears_collections_and_keeps_last_updated(now: pd.Timestamp) -> None:
    source = ScriptedSource(FIRST_PAYLOAD, TransportError("Unable to reach webhook: boom"))
    controller = DashboardController(source)
    controller.refresh(now)

    later = now + pd.Timedelta(minutes=5)
    controller.refresh(later)

    state = controller.state
    assert state.appointments == []
    assert state.customers == []
    assert state.error == "Failed to fetch data: Unable to reach webhook: boom"
    assert state.last_updated == now
    assert state.last_attempt == later
    assert state.is_refreshing is False


def test_success_after_failure_clears_error_and_replaces(now: pd.Timestamp) -> None:
    source = ScriptedSource(
        FIRST_PAYLOAD,
        ResponseStatusError("Webhook returned HTTP 500", status_code=500),
        SECOND_PAYLOAD,
    )
    controller = DashboardController(source)

    controller.refresh(now)
    controller.refresh(now)
    assert controller.state.error is not None

    controller.refresh(now)

    state = controller.state
    assert state.error is None
    assert [a.id for a in state.appointments] == ["a3"]
    assert state.appointments[0].status == "completed"
    # Full replace: customers absent from the new payload are gone.
    assert state.customers == []


def test_successive_successes_replace_rather_than_merge(now: pd.Timestamp) -> None:
    controller = DashboardController(ScriptedSource(FIRST_PAYLOAD, SECOND_PAYLOAD))

    controller.refresh(now)
    controller.refresh(now)

    assert [a.id for a in controller.state.appointments] == ["a3"]


def test_malformed_body_is_a_failed_cycle(now: pd.Timestamp) -> None:
    controller = DashboardController(ScriptedSource(["not", "an", "object"]))

    controller.refresh(now)

    assert controller.state.appointments == []
    assert controller.state.error.startswith("Failed to fetch data: Expected a JSON object")


def test_refreshing_flag_is_set_while_fetching(now: pd.Timestamp) -> None:
    source = ScriptedSource(FIRST_PAYLOAD, TransportError("down"))
    controller = DashboardController(source)
    seen = []
    source.on_fetch = lambda: seen.append(controller.state.is_refreshing)

    controller.refresh(now)
    controller.refresh(now)

    assert seen == [True, True]
    assert controller.state.is_refreshing is False


def test_overlapping_trigger_is_skipped(now: pd.Timestamp) -> None:
    source = ScriptedSource(FIRST_PAYLOAD)
    controller = DashboardController(source)
    nested = []
    source.on_fetch = lambda: nested.append(controller.refresh(now))

    assert controller.refresh(now) is True

    assert nested == [False]
    assert source.calls == 1
    assert [a.id for a in controller.state.appointments] == ["a1", "a2"]


def test_refresh_if_due_respects_interval(now: pd.Timestamp) -> None:
    source = ScriptedSource(FIRST_PAYLOAD, SECOND_PAYLOAD)
    controller = DashboardController(source, refresh_interval=300)

    assert controller.is_due(now) is True
    assert controller.refresh_if_due(now) is True
    assert controller.refresh_if_due(now + pd.Timedelta(minutes=4)) is False
    assert source.calls == 1
    assert controller.refresh_if_due(now + pd.Timedelta(minutes=5)) is True
    assert source.calls == 2


def test_failed_cycle_also_waits_for_next_interval(now: pd.Timestamp) -> None:
    controller = DashboardController(ScriptedSource(TransportError("down")), refresh_interval=60)

    controller.refresh(now)

    assert controller.is_due(now + pd.Timedelta(seconds=30)) is False
    assert controller.is_due(now + pd.Timedelta(seconds=60)) is True


def test_missing_webhook_url_surfaces_as_error(now: pd.Timestamp) -> None:
    controller = DashboardController(MissingWebhookSource())

    controller.refresh(now)

    assert controller.state.error == "Failed to fetch data: WEBHOOK_URL is not configured"


@pytest.mark.parametrize(
    "settings, expected",
    [
        (Settings(webhook_url=None, use_sample_data=True), SampleClient),
        (Settings(webhook_url="https://hooks.example.com/x"), WebhookClient),
        (Settings(webhook_url=None), MissingWebhookSource),
    ],
)
def test_build_controller_picks_source(settings: Settings, expected: type) -> None:
    controller = build_controller(settings)

    assert isinstance(controller.source, expected)
    assert controller.refresh_interval == pd.Timedelta(seconds=settings.refresh_interval)
