"""
Normalization of raw session payloads.

Raw sessions arrive with fields of unknown presence and type. Parsing is
lenient: nothing here raises for a bad record, missing scalars become the
``"N/A"`` sentinel and a missing or unreadable timestamp becomes "now".
"""

import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd
from loguru import logger

from registration_dashboard.models import (
    NOT_AVAILABLE,
    ClassifiedRecord,
    FormDataResponse,
    MalformedRecord,
    PartitionedRecords,
    RawRecord,
    RegistrationRecord,
)

# (record field, wire key) for every scalar that falls back to the sentinel.
_SCALAR_KEYS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("phone_number", "phoneNumber"),
    ("email", "email"),
    ("college", "college"),
    ("year", "year"),
    ("department", "department"),
    ("roll_number", "rollNumber"),
    ("session_id", "sessionId"),
)


def default_scalar(value: Any) -> str:
    """Return ``value`` as text, or ``"N/A"`` when it is missing or empty."""
    if not value:
        return NOT_AVAILABLE
    return str(value)


def _coerce_tags(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(tag) for tag in value if tag is not None)
    return ()


def _coerce_proof(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


def parse_created_at(value: Any, now: Optional[datetime] = None) -> datetime:
    """
    Parse a source timestamp into an aware UTC datetime.

    Numbers are epoch milliseconds, strings are parsed as dates. A missing or
    zero value falls back to ``now``, as does anything unparseable or out of
    range.

    Args:
        value: Raw ``timestamp`` value from the payload
        now: Fallback time; defaults to the current UTC time

    Returns:
        datetime: Timezone-aware creation time
    """
    fallback = now or datetime.now(timezone.utc)

    if value is None or isinstance(value, bool) or value == "" or value == 0:
        return fallback

    try:
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return fallback
            parsed = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
        elif isinstance(value, str):
            parsed = pd.to_datetime(value.strip(), utc=True, errors="coerce")
        else:
            return fallback

        if pd.isna(parsed):
            logger.debug(f"Unparseable timestamp {value!r}, using fallback")
            return fallback
        return parsed.to_pydatetime()
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime) as e:
        logger.debug(f"Out of range timestamp {value!r}, using fallback: {str(e)}")
        return fallback


def classify_raw_record(raw: Any) -> ClassifiedRecord:
    """Separate recognizable session objects from malformed entries."""
    if isinstance(raw, Mapping):
        return RawRecord(payload=raw)
    return MalformedRecord(original=raw)


def normalize_record(
    raw: Union[Any, ClassifiedRecord],
    now: Optional[datetime] = None,
) -> RegistrationRecord:
    """
    Build the canonical record for a single raw session.

    Args:
        raw: Raw session (any JSON value) or an already classified record
        now: Fallback creation time for records without a usable timestamp

    Returns:
        RegistrationRecord: Normalized, immutable record
    """
    classified = raw if isinstance(raw, (RawRecord, MalformedRecord)) else classify_raw_record(raw)

    if isinstance(classified, MalformedRecord):
        logger.debug(f"Malformed session entry of type {type(classified.original).__name__}")
        return RegistrationRecord(created_at=parse_created_at(None, now))

    values = {field: default_scalar(classified.value(key)) for field, key in _SCALAR_KEYS}
    return RegistrationRecord(
        **values,
        selected_tags=_coerce_tags(classified.value("selectedEvents")),
        proof_reference=_coerce_proof(classified.value("paymentProof")),
        created_at=parse_created_at(classified.value("timestamp"), now),
    )


def partition_records(
    raw_records: Iterable[Any],
    now: Optional[datetime] = None,
) -> PartitionedRecords:
    """Normalize records in order and split them on presence of payment proof."""
    complete: List[RegistrationRecord] = []
    incomplete: List[RegistrationRecord] = []

    for raw in raw_records:
        record = normalize_record(raw, now)
        if record.is_complete:
            complete.append(record)
        else:
            incomplete.append(record)

    return PartitionedRecords(complete=tuple(complete), incomplete=tuple(incomplete))


def normalize_payload(
    payload: Union[FormDataResponse, Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> PartitionedRecords:
    """
    Normalize a form data response into completed and incomplete sessions.

    Both server-side lists are merged (completed first) and every session is
    re-partitioned by its own payment proof, so the server's grouping is not
    trusted.

    Args:
        payload: Validated response or the raw response mapping
        now: Fallback creation time for records without a usable timestamp

    Returns:
        PartitionedRecords: Sessions split by completion status
    """
    if not isinstance(payload, FormDataResponse):
        payload = FormDataResponse.model_validate(dict(payload))

    # Every fallback time in a batch is the same instant.
    now = now or datetime.now(timezone.utc)
    merged = [*payload.completed_sessions, *payload.incomplete_sessions]
    partitions = partition_records(merged, now)

    logger.info(
        f"Normalized {partitions.total} sessions: "
        f"{len(partitions.complete)} completed, {len(partitions.incomplete)} incomplete"
    )
    return partitions
