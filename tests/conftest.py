"""Shared fixtures for the registration dashboard test-suite."""

from datetime import datetime, timezone

import pytest

from registration_dashboard.config import get_settings
from registration_dashboard.models import RegistrationRecord


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 5, 14, 7, tzinfo=timezone.utc)


@pytest.fixture
def raw_payload():
    """Response body shaped like the form data endpoint's."""
    return {
        "completedSessions": [
            {
                "name": "Asha Rao",
                "phoneNumber": "9876543210",
                "email": "asha@example.com",
                "college": "PSG Tech",
                "year": "3",
                "department": "ECE",
                "rollNumber": "21EC101",
                "selectedEvents": ["bizquiz", "admania"],
                "paymentProof": "uploads/asha.png",
                "sessionId": "s-1",
                "timestamp": 1709647620000,
            },
            {
                "name": "Ravi Kumar",
                "selectedEvents": ["stocksim"],
                "paymentProof": "uploads/ravi.jpg",
                "sessionId": "s-2",
                "timestamp": "2024-03-01T09:30:00Z",
            },
        ],
        "incompleteSessions": [
            {
                "name": "Meera",
                "selectedEvents": ["bizquiz"],
                "sessionId": "s-3",
            },
            {"sessionId": "s-4"},
        ],
    }


@pytest.fixture
def make_record(fixed_now):
    """Build a normalized record with sensible defaults."""

    def _make(**overrides) -> RegistrationRecord:
        values = {"session_id": "s-x", "created_at": fixed_now}
        values.update(overrides)
        return RegistrationRecord(**values)

    return _make
