"""
Pydantic models for registration sessions.

``RegistrationRecord`` is the canonical, immutable shape every session is
normalized into. Field aliases carry the wire keys used by the registration
backend, which are also the column headers of exported workbooks.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_AVAILABLE = "N/A"


class Tag(str, Enum):
    """Event tags a registrant can sign up for."""
    BIZQUIZ = "bizquiz"
    ECONEXUS = "econexus"
    STOCKSIM = "stocksim"
    ADMANIA = "admania"
    CRYPTOHUNT = "cryptohunt"
    STARTUP = "startup"


TAG_COLORS: Dict[str, str] = {
    Tag.BIZQUIZ.value: "#3b82f6",
    Tag.ECONEXUS.value: "#22c55e",
    Tag.STOCKSIM.value: "#eab308",
    Tag.ADMANIA.value: "#a855f7",
    Tag.CRYPTOHUNT.value: "#ef4444",
    Tag.STARTUP.value: "#6366f1",
}

KNOWN_TAGS: Tuple[str, ...] = tuple(tag.value for tag in Tag)


class RegistrationRecord(BaseModel):
    """Canonical registration entry. Frozen once normalized."""
    name: str = Field(default=NOT_AVAILABLE, alias="name")
    phone_number: str = Field(default=NOT_AVAILABLE, alias="phoneNumber")
    email: str = Field(default=NOT_AVAILABLE, alias="email")
    college: str = Field(default=NOT_AVAILABLE, alias="college")
    year: str = Field(default=NOT_AVAILABLE, alias="year")
    department: str = Field(default=NOT_AVAILABLE, alias="department")
    roll_number: str = Field(default=NOT_AVAILABLE, alias="rollNumber")
    # Unknown tag values are kept as-is.
    selected_tags: Tuple[str, ...] = Field(default=(), alias="selectedEvents")
    proof_reference: Optional[str] = Field(default=None, alias="paymentProof")
    session_id: str = Field(default=NOT_AVAILABLE, alias="sessionId")
    created_at: datetime = Field(alias="timestamp")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_complete(self) -> bool:
        return bool(self.proof_reference)


class PartitionedRecords(BaseModel):
    """Completed and incomplete sessions, each in input order."""
    complete: Tuple[RegistrationRecord, ...] = ()
    incomplete: Tuple[RegistrationRecord, ...] = ()

    model_config = ConfigDict(frozen=True)

    def get(self, partition: str) -> Tuple[RegistrationRecord, ...]:
        if partition == "completed":
            return self.complete
        if partition == "incomplete":
            return self.incomplete
        raise ValueError(f"Unknown partition: {partition}")

    @property
    def total(self) -> int:
        return len(self.complete) + len(self.incomplete)


class RawRecord(BaseModel):
    """A raw session whose top level is a JSON object."""
    payload: Mapping[str, Any]

    def value(self, key: str) -> Any:
        return self.payload.get(key)


class MalformedRecord(BaseModel):
    """A raw session entry that is not a JSON object at all."""
    original: Any = None


ClassifiedRecord = Union[RawRecord, MalformedRecord]


class FormDataResponse(BaseModel):
    """Response body of the form data endpoint."""
    completed_sessions: List[Any] = Field(default_factory=list, alias="completedSessions")
    incomplete_sessions: List[Any] = Field(default_factory=list, alias="incompleteSessions")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("completed_sessions", "incomplete_sessions", mode="before")
    @classmethod
    def _coerce_session_list(cls, v: Any) -> List[Any]:
        if isinstance(v, (list, tuple)):
            return list(v)
        return []
