"""Quick validation script for the ingestion path.

Run with `python scripts/validate_normalization.py` to push the sample payload
through normalization, or `python scripts/validate_normalization.py --live`
to fetch once from WEBHOOK_URL and report what came back.
"""

from __future__ import annotations

import sys

import pandas as pd

import groomdash.bootstrap_env  # noqa: F401
from groomdash.config import get_settings
from groomdash.data.sample import sample_payload
from groomdash.data.normalize import normalize_payload
from groomdash.logging_config import configure_logging
from groomdash.state import build_controller


def _check_sample() -> None:
    now = pd.Timestamp.now(tz="UTC")
    normalized = normalize_payload(sample_payload(now), now)

    if len(normalized.appointments) != 4 or len(normalized.customers) != 4:
        raise SystemExit(
            f"Expected 4 appointments and 4 customers, got "
            f"{len(normalized.appointments)} / {len(normalized.customers)}"
        )
    missing_contact = [a.id for a in normalized.appointments if not a.contact_info]
    if missing_contact:
        raise SystemExit(f"Contact alias not resolved for appointments: {missing_contact}")

    assert normalized.appointments[0].status == "today", "First sample appointment should be today"
    assert all(a.status == "upcoming" for a in normalized.appointments[1:]), "Later appointments should be upcoming"

    print("Normalization validation passed. Appointments:", len(normalized.appointments))


def _check_live() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    controller = build_controller(settings)
    controller.refresh()
    state = controller.state
    if state.error:
        raise SystemExit(state.error)
    print(
        f"Fetched {len(state.appointments)} appointments and {len(state.customers)} customers "
        f"({state.skipped_records} skipped) from {controller.source.url}"
    )


def main() -> None:
    if "--live" in sys.argv[1:]:
        _check_live()
    else:
        _check_sample()


if __name__ == "__main__":
    main()
