"""Tag selection and filtering over normalized sessions."""

from typing import AbstractSet, Dict, Iterable, List, Sequence

from registration_dashboard.models import KNOWN_TAGS, PartitionedRecords, RegistrationRecord


def toggle_tag(selection: AbstractSet[str], tag: str) -> frozenset:
    """Add ``tag`` to the selection if absent, remove it if present."""
    return frozenset(selection) ^ {tag}


def matches_tags(
    record: RegistrationRecord,
    selected_tags: AbstractSet[str],
    match_all: bool = False,
) -> bool:
    if not selected_tags:
        return True
    if match_all:
        return set(selected_tags).issubset(record.selected_tags)
    return not set(selected_tags).isdisjoint(record.selected_tags)


def filter_records(
    records: Iterable[RegistrationRecord],
    selected_tags: AbstractSet[str],
    match_all: bool = False,
) -> List[RegistrationRecord]:
    """
    Keep the records matching the tag selection, in their original order.

    An empty selection means "no filter". Otherwise a record matches when it
    shares at least one tag with the selection, or, with ``match_all``, when it
    carries every selected tag.

    Args:
        records: Sessions to filter
        selected_tags: Currently selected tags
        match_all: Require every selected tag instead of any

    Returns:
        List[RegistrationRecord]: Matching sessions
    """
    return [record for record in records if matches_tags(record, selected_tags, match_all)]


def filter_partitions(
    partitions: PartitionedRecords,
    selected_tags: AbstractSet[str],
    match_all: bool = False,
) -> PartitionedRecords:
    return PartitionedRecords(
        complete=tuple(filter_records(partitions.complete, selected_tags, match_all)),
        incomplete=tuple(filter_records(partitions.incomplete, selected_tags, match_all)),
    )


def tag_counts(records: Sequence[RegistrationRecord]) -> Dict[str, int]:
    """Count registrants per tag; known tags always appear, unknown ones after them."""
    counts: Dict[str, int] = {tag: 0 for tag in KNOWN_TAGS}
    for record in records:
        # A tag listed twice on one registration counts once.
        for tag in dict.fromkeys(record.selected_tags):
            counts[tag] = counts.get(tag, 0) + 1
    return counts
