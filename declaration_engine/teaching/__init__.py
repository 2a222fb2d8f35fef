"""Teaching-hour records - recurring weekly commitments and their guards."""

from declaration_engine.teaching.types import ActivityType, HourKind, PostGrade, TeachingHourRecord
from declaration_engine.teaching.validators import (
    ensure_editable,
    ensure_not_duplicate,
    find_duplicate,
    mark_processed,
    update_record,
)

__all__ = [
    "ActivityType",
    "HourKind",
    "PostGrade",
    "TeachingHourRecord",
    "ensure_editable",
    "ensure_not_duplicate",
    "find_duplicate",
    "mark_processed",
    "update_record",
]
