"""
Excel export of registration sessions.

Records are flattened to display text (formatted time, comma-joined tags) and
written to a workbook with a single ``Responses`` sheet. The records
themselves are never modified.
"""

from datetime import datetime, tzinfo
from io import BytesIO
from pathlib import Path
from typing import Any, Iterable, Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd
from loguru import logger
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from registration_dashboard.models import RegistrationRecord

SHEET_NAME = "Responses"

EXPORT_COLUMNS = [
    "name",
    "phoneNumber",
    "email",
    "college",
    "year",
    "department",
    "rollNumber",
    "selectedEvents",
    "paymentProof",
    "sessionId",
    "timestamp",
]

EXPORT_BASENAMES = {
    "completed": "completed_sessions",
    "incomplete": "incomplete_sessions",
}


class ExportError(Exception):
    """Raised when a workbook cannot be written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


def resolve_timezone(tz: Union[str, tzinfo, None]) -> Optional[tzinfo]:
    if tz is None or isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz)


def format_created_at(value: datetime, tz: Union[str, tzinfo, None] = None) -> str:
    """
    Format a creation time as e.g. ``"Mar 5, 2024, 02:07 PM"``.

    Args:
        value: Time to format
        tz: Display timezone (name or tzinfo); the value's own zone if omitted

    Returns:
        str: Human-readable date and time
    """
    zone = resolve_timezone(tz)
    local = value.astimezone(zone) if zone is not None else value
    return f"{local:%b} {local.day}, {local:%Y, %I:%M %p}"


def export_basename(partition: str) -> str:
    try:
        return EXPORT_BASENAMES[partition]
    except KeyError:
        raise ValueError(f"Unknown partition: {partition}") from None


def _sanitize(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def to_export_frame(
    records: Iterable[RegistrationRecord],
    tz: Union[str, tzinfo, None] = None,
) -> pd.DataFrame:
    """
    Flatten records into one display-text row each.

    Columns follow the canonical record order and use the backend's field
    names as headers. Control characters a worksheet cannot hold are dropped
    from the text.
    """
    zone = resolve_timezone(tz)
    rows = []
    for record in records:
        row = record.model_dump(by_alias=True)
        row["selectedEvents"] = ", ".join(record.selected_tags)
        row["paymentProof"] = record.proof_reference or ""
        row["timestamp"] = format_created_at(record.created_at, zone)
        rows.append({key: _sanitize(value) for key, value in row.items()})
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def workbook_bytes(
    records: Iterable[RegistrationRecord],
    tz: Union[str, tzinfo, None] = None,
) -> bytes:
    """Render records as an in-memory xlsx workbook."""
    df = to_export_frame(records, tz)
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        # Registrant text is stored as text, never as a formula.
        for row in writer.sheets[SHEET_NAME].iter_rows(min_row=2):
            for cell in row:
                if cell.data_type == "f":
                    cell.data_type = "s"
    return output.getvalue()


def export_records(
    records: Iterable[RegistrationRecord],
    basename: str,
    directory: Union[str, Path, None] = None,
    tz: Union[str, tzinfo, None] = None,
) -> Path:
    """
    Write records to ``<directory>/<basename>.xlsx``.

    Args:
        records: Sessions to export
        basename: File name without extension
        directory: Target directory, created if missing; current directory by default
        tz: Display timezone for the timestamp column

    Returns:
        Path: Location of the written workbook

    Raises:
        ExportError: If the workbook cannot be written
    """
    target_dir = Path(directory) if directory is not None else Path(".")
    path = target_dir / f"{basename}.xlsx"
    content = workbook_bytes(records, tz)

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as e:
        logger.error(f"Failed to write workbook {path}: {str(e)}")
        raise ExportError(f"Failed to write {path}: {str(e)}", path) from e

    logger.info(f"Exported workbook to {path}")
    return path
