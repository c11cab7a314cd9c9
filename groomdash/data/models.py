"""
Typed records produced by the ingestion cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

import pandas as pd

STATUS_TODAY = "today"
STATUS_UPCOMING = "upcoming"
STATUS_COMPLETED = "completed"

Status = Literal["upcoming", "today", "completed"]

STATUS_LABELS: Dict[str, str] = {
    STATUS_TODAY: "Today",
    STATUS_UPCOMING: "Upcoming",
    STATUS_COMPLETED: "Completed",
}

STATUS_BADGES: Dict[str, str] = {
    STATUS_TODAY: "🟠",
    STATUS_UPCOMING: "🔵",
    STATUS_COMPLETED: "🟢",
}


@dataclass(frozen=True)
class Appointment:
    id: str
    owner_name: str
    pet_type: str
    service_type: str
    date_time: pd.Timestamp
    contact_info: str
    status: Status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ownerName": self.owner_name,
            "petType": self.pet_type,
            "serviceType": self.service_type,
            "dateTime": self.date_time.isoformat(),
            "contactInfo": self.contact_info,
            "status": self.status,
        }


@dataclass(frozen=True)
class Customer:
    id: str
    owner_name: str
    pet_type: str
    service_type: str
    preferred_date_time: str
    contact_info: str
    email: str
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "ownerName": self.owner_name,
            "petType": self.pet_type,
            "serviceType": self.service_type,
            "preferredDateTime": self.preferred_date_time,
            "contactInfo": self.contact_info,
            "email": self.email,
            "notes": self.notes,
        }
