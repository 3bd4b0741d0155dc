from .registration import (
    KNOWN_TAGS,
    NOT_AVAILABLE,
    TAG_COLORS,
    ClassifiedRecord,
    FormDataResponse,
    MalformedRecord,
    PartitionedRecords,
    RawRecord,
    RegistrationRecord,
    Tag,
)

__all__ = [
    "KNOWN_TAGS",
    "NOT_AVAILABLE",
    "TAG_COLORS",
    "ClassifiedRecord",
    "FormDataResponse",
    "MalformedRecord",
    "PartitionedRecords",
    "RawRecord",
    "RegistrationRecord",
    "Tag",
]
