"""
Sample webhook payload for demo mode and local development.

Dates are generated relative to ``now`` so the dashboard always shows one
appointment today and a few upcoming ones. Records deliberately mix the
camel-case and snake-case key spellings the webhook may send.
"""

from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from groomdash.data.normalize import as_utc


def _iso(ts: pd.Timestamp) -> str:
    return ts.isoformat().replace("+00:00", "Z")


def sample_payload(now: pd.Timestamp) -> Dict[str, Any]:
    now = as_utc(now)
    day = pd.Timedelta(days=1)
    return {
        "appointments": [
            {
                "id": "1",
                "ownerName": "Sarah Johnson",
                "petType": "Golden Retriever",
                "serviceType": "Full Grooming",
                "dateTime": _iso(now),
                "contactInfo": "(555) 123-4567",
            },
            {
                "id": "2",
                "owner_name": "Mike Chen",
                "pet_type": "Persian Cat",
                "service_type": "Nail Trim",
                "date_time": _iso(now + day),
                "phone": "(555) 987-6543",
            },
            {
                "id": "3",
                "ownerName": "Emily Rodriguez",
                "petType": "Poodle",
                "serviceType": "Bath & Brush",
                "dateTime": _iso(now + 2 * day),
                "contact_info": "(555) 456-7890",
            },
            {
                "id": "4",
                "ownerName": "David Wilson",
                "petType": "German Shepherd",
                "serviceType": "Full Grooming",
                "dateTime": _iso(now + 3 * day),
                "contactInfo": "(555) 321-0987",
            },
        ],
        "customers": [
            {
                "id": "1",
                "ownerName": "Sarah Johnson",
                "petType": "Golden Retriever",
                "serviceType": "Full Grooming",
                "preferredDateTime": "Weekday mornings",
                "contactInfo": "(555) 123-4567",
                "email": "sarah.j@email.com",
                "notes": "Rex is very friendly but gets nervous with nail trims",
            },
            {
                "id": "2",
                "owner_name": "Mike Chen",
                "pet_type": "Persian Cat",
                "service_type": "Nail Trim",
                "preferred_date_time": "Weekends",
                "phone": "(555) 987-6543",
                "email": "mike.chen@email.com",
                "notes": "Fluffy needs sedative for grooming",
            },
            {
                "id": "3",
                "ownerName": "Emily Rodriguez",
                "petType": "Poodle",
                "serviceType": "Bath & Brush",
                "preferredDateTime": "Any time",
                "contactInfo": "(555) 456-7890",
                "email": "emily.r@email.com",
            },
            {
                "id": "4",
                "ownerName": "David Wilson",
                "petType": "German Shepherd",
                "serviceType": "Full Grooming",
                "preferredDateTime": "Afternoons",
                "contactInfo": "(555) 321-0987",
                "email": "david.w@email.com",
                "notes": "Max is large and needs extra time",
            },
        ],
    }
