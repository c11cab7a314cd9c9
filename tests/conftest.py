import os
import sys

import pandas as pd
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from groomdash.data.models import Appointment, Customer  # noqa: E402


@pytest.fixture
def now() -> pd.Timestamp:
    return pd.Timestamp("2024-01-01T12:00:00Z")


@pytest.fixture
def make_appointment():
    def _make(**overrides) -> Appointment:
        fields = {
            "id": "1",
            "owner_name": "Sarah Johnson",
            "pet_type": "Golden Retriever",
            "service_type": "Full Grooming",
            "date_time": pd.Timestamp("2024-01-01T15:00:00Z"),
            "contact_info": "(555) 123-4567",
            "status": "today",
        }
        fields.update(overrides)
        return Appointment(**fields)

    return _make


@pytest.fixture
def sample_customers():
    return [
        Customer(
            id="1",
            owner_name="Sarah Johnson",
            pet_type="Golden Retriever",
            service_type="Full Grooming",
            preferred_date_time="Weekday mornings",
            contact_info="(555) 123-4567",
            email="sarah.j@email.com",
            notes="Rex gets nervous with nail trims",
        ),
        Customer(
            id="2",
            owner_name="Mike Chen",
            pet_type="Persian Cat",
            service_type="Nail Trim",
            preferred_date_time="Weekends",
            contact_info="(555) 987-6543",
            email="MIKE.CHEN@Example.org",
        ),
        Customer(
            id="3",
            owner_name="Emily Rodriguez",
            pet_type="Poodle",
            service_type="Bath & Brush",
            preferred_date_time="Any time",
            contact_info="(555) 456-7890",
            email="emily.r@email.com",
        ),
    ]
