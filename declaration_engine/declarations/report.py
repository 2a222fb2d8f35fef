"""Semester report over recurring teaching-hour records.

Summarizes the weekly commitments themselves (not their dated
occurrences): how many records and weekly hours a teacher has per
activity type, per discipline and per month of entry.
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from declaration_engine.declarations.types import HourBreakdown
from declaration_engine.teaching.types import TeachingHourRecord


class RecordReport(BaseModel):
    """Totals over a semester's teaching-hour records."""

    academic_year: str
    semester: int
    total_records: int = 0
    total_hours: float = 0.0
    by_activity_type: dict[str, HourBreakdown] = Field(default_factory=dict)
    by_discipline: dict[str, HourBreakdown] = Field(default_factory=dict)
    by_month: dict[str, HourBreakdown] = Field(default_factory=dict)


def _add(buckets: dict[str, HourBreakdown], key: str, hours: float) -> None:
    bucket = buckets.setdefault(key, HourBreakdown())
    bucket.count += 1
    bucket.hours += hours


def summarize_records(
    records: Iterable[TeachingHourRecord],
    academic_year: str,
    semester: int,
) -> RecordReport:
    """Summarize the records of one academic year and semester.

    Records without a creation timestamp are left out of the monthly
    breakdown only.
    """
    report = RecordReport(academic_year=academic_year, semester=semester)
    for record in records:
        if record.academic_year != academic_year or record.semester != semester:
            continue
        report.total_records += 1
        report.total_hours += record.hours
        _add(report.by_activity_type, str(record.activity_type), record.hours)
        _add(report.by_discipline, record.discipline_name, record.hours)
        if record.created_at is not None:
            _add(report.by_month, record.created_at.strftime("%Y-%m"), record.hours)
    return report
