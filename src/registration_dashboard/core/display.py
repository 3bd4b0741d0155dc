"""Table projection of sessions for the dashboard."""

from datetime import tzinfo
from typing import Iterable, Optional, Union

import pandas as pd

from registration_dashboard.core.export import format_created_at, resolve_timezone
from registration_dashboard.models import RegistrationRecord

DISPLAY_COLUMNS = [
    "Name",
    "Phone",
    "Email",
    "College",
    "Year",
    "Department",
    "Roll Number",
    "Events",
    "Date & Time",
    "Payment Proof",
]


def proof_url(reference: Optional[str], base_url: str) -> Optional[str]:
    """Link to an uploaded payment proof, or None if there is none."""
    if not reference:
        return None
    return base_url + reference


def to_display_frame(
    records: Iterable[RegistrationRecord],
    base_url: str,
    tz: Union[str, tzinfo, None] = None,
) -> pd.DataFrame:
    zone = resolve_timezone(tz)
    rows = [
        {
            "Name": record.name,
            "Phone": record.phone_number,
            "Email": record.email,
            "College": record.college,
            "Year": record.year,
            "Department": record.department,
            "Roll Number": record.roll_number,
            "Events": list(record.selected_tags),
            "Date & Time": format_created_at(record.created_at, zone),
            "Payment Proof": proof_url(record.proof_reference, base_url),
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=DISPLAY_COLUMNS)
