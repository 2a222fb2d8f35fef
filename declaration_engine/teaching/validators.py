"""Teaching-hour record guards.

Field invariants live on the model itself. This module enforces the
cross-record rules:
- No two records of a teacher describe the same weekly slot and hour kind
- Records consumed by a finalized declaration are read-only
"""

from collections.abc import Iterable
from typing import Any

from loguru import logger

from declaration_engine.errors import AlreadyExistsError, RecordLockedError
from declaration_engine.teaching.types import TeachingHourRecord


def _slot_key(record: TeachingHourRecord) -> tuple:
    return (
        record.user_id,
        record.post_number,
        record.day_of_week,
        record.odd_even,
        record.special_week if record.is_special else None,
        record.group.casefold(),
        record.hour_kind,
    )


def find_duplicate(
    records: Iterable[TeachingHourRecord],
    candidate: TeachingHourRecord,
) -> TeachingHourRecord | None:
    """Find an existing record describing the same weekly slot as candidate.

    Two records collide when they share teacher, post number, weekday,
    parity, special week, group and hour kind.
    """
    key = _slot_key(candidate)
    for record in records:
        if record.id != candidate.id and _slot_key(record) == key:
            return record
    return None


def ensure_not_duplicate(records: Iterable[TeachingHourRecord], candidate: TeachingHourRecord) -> None:
    """Raise AlreadyExistsError when candidate duplicates an existing record."""
    duplicate = find_duplicate(records, candidate)
    if duplicate is not None:
        raise AlreadyExistsError(
            f"Teaching-hour record {duplicate.id} already covers {candidate.day_of_week} "
            f"post {candidate.post_number} group {candidate.group} ({candidate.hour_kind})"
        )


def ensure_editable(record: TeachingHourRecord) -> None:
    """Raise RecordLockedError when the record was processed in a declaration."""
    if record.processed_in_declaration:
        raise RecordLockedError(record.id)


def update_record(record: TeachingHourRecord, **changes: Any) -> TeachingHourRecord:
    """Return a re-validated copy of record with changes applied.

    Raises:
        RecordLockedError: If the record is read-only
        pydantic.ValidationError: If the changes break a record invariant
    """
    ensure_editable(record)
    data = record.model_dump()
    hour_fields = {"course_hours", "seminar_hours", "lab_hours", "project_hours"}
    if hour_fields & changes.keys():
        data.pop("hour_kind")
        data.pop("hours")
    data.update(changes)
    return TeachingHourRecord.model_validate(data)


def mark_processed(records: Iterable[TeachingHourRecord]) -> list[TeachingHourRecord]:
    """Return copies of records flagged as consumed by a declaration."""
    processed = [record.model_copy(update={"processed_in_declaration": True}) for record in records]
    logger.debug(f"[TEACHING_HOURS] Marked {len(processed)} record(s) as processed")
    return processed
