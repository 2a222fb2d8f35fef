"""Declaration aggregation.

Expands every active teaching-hour record over a period, prices each
occurrence, merges occurrences sharing a grouping key and summarizes the
result. Deterministic: identical inputs give identical items and summary.

Steps:
1. Expand each active (verified or approved) record with the pattern matcher
2. Build one raw item per occurrence
3. Merge items sharing (post_number, discipline_name, activity_type, groups, date)
4. Stable sort by date (ties keep record-processing order)
5. Summarize
6. Validate (findings reported, not raised)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from loguru import logger

from declaration_engine.calendar.builder import iter_dates
from declaration_engine.calendar.types import CalendarDay
from declaration_engine.declarations.coefficients import CoefficientTable
from declaration_engine.declarations.matcher import Occurrence, expand_record
from declaration_engine.declarations.types import (
    DeclarationItem,
    DeclarationMetadata,
    DeclarationPeriod,
    DeclarationResult,
    DeclarationSummary,
    GroupKey,
    HourBreakdown,
)
from declaration_engine.declarations.validators import validate_declaration_items
from declaration_engine.errors import InvalidRangeError
from declaration_engine.teaching.types import TeachingHourRecord


def build_item(occurrence: Occurrence, coefficients: CoefficientTable) -> DeclarationItem:
    """Build the raw declaration item of one occurrence."""
    record = occurrence.record
    return DeclarationItem(
        post_number=record.post_number,
        post_grade=record.post_grade,
        date=occurrence.date,
        discipline_name=record.discipline_name,
        activity_type=record.activity_type,
        groups=record.group,
        course_hours=record.course_hours,
        seminar_hours=record.seminar_hours,
        lab_hours=record.lab_hours,
        project_hours=record.project_hours,
        coefficient=coefficients.lookup(record.activity_type, record.hour_kind),
        total_hours=record.hours,
    )


def group_items(items: Iterable[DeclarationItem]) -> list[DeclarationItem]:
    """Merge items sharing a grouping key and sort them by date.

    Hour fields and total_hours are summed; grade and coefficient of the
    first item of a group are kept. Groups keep first-seen order among
    equal dates.
    """
    grouped: dict[GroupKey, DeclarationItem] = {}
    for item in items:
        key = item.group_key
        existing = grouped.get(key)
        if existing is None:
            grouped[key] = item.model_copy()
            continue
        if existing.coefficient != item.coefficient:
            logger.debug(
                f"[DECLARATION] Merging items with different coefficients on {item.date} "
                f"({existing.coefficient} vs {item.coefficient}), keeping {existing.coefficient}"
            )
        grouped[key] = existing.model_copy(
            update={
                "course_hours": existing.course_hours + item.course_hours,
                "seminar_hours": existing.seminar_hours + item.seminar_hours,
                "lab_hours": existing.lab_hours + item.lab_hours,
                "project_hours": existing.project_hours + item.project_hours,
                "total_hours": existing.total_hours + item.total_hours,
            }
        )

    # sorted() is stable; undated items go last
    return sorted(grouped.values(), key=lambda i: (i.date is None, i.date or date.min))


def summarize_items(items: Sequence[DeclarationItem]) -> DeclarationSummary:
    """Compute per-kind totals, distinct days and breakdowns of items."""
    summary = DeclarationSummary(item_count=len(items))
    days: set[date] = set()

    for item in items:
        summary.total_course_hours += item.course_hours
        summary.total_seminar_hours += item.seminar_hours
        summary.total_lab_hours += item.lab_hours
        summary.total_project_hours += item.project_hours
        summary.total_hours += item.total_hours
        if item.date is not None:
            days.add(item.date)

        activity = summary.by_activity_type.setdefault(str(item.activity_type), HourBreakdown())
        activity.count += 1
        activity.hours += item.total_hours

        discipline = summary.by_discipline.setdefault(item.discipline_name, HourBreakdown())
        discipline.count += 1
        discipline.hours += item.total_hours

    summary.total_days = len(days)
    return summary


def aggregate_declaration(
    records: Sequence[TeachingHourRecord],
    calendar_index: Mapping[date, CalendarDay],
    start_date: date,
    end_date: date,
    coefficients: CoefficientTable | None = None,
) -> DeclarationResult:
    """Generate declaration items and summary for a period.

    Args:
        records: Teaching-hour records of one user and semester
        calendar_index: Verified calendar days keyed by date
        start_date: Period start (inclusive)
        end_date: Period end (inclusive)
        coefficients: Coefficient table (defaults to CoefficientTable.from_settings())

    Returns:
        DeclarationResult; check result.validation before finalizing

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)

    table = coefficients or CoefficientTable.from_settings()
    active = [record for record in records if record.is_active]

    raw_items: list[DeclarationItem] = []
    record_ids: list[str] = []
    for record in active:
        occurrences = expand_record(record, calendar_index, start_date, end_date)
        if occurrences:
            record_ids.append(record.id)
        raw_items.extend(build_item(occurrence, table) for occurrence in occurrences)

    items = group_items(raw_items)
    summary = summarize_items(items)
    validation = validate_declaration_items(items)

    total_days = (end_date - start_date).days + 1
    metadata = DeclarationMetadata(
        total_records=len(records),
        active_records=len(active),
        total_calendar_days=sum(1 for d in iter_dates(start_date, end_date) if d in calendar_index),
        raw_items=len(raw_items),
        processed_items=len(items),
        period=DeclarationPeriod(start_date=start_date, end_date=end_date, total_days=total_days),
        record_ids=record_ids,
    )

    logger.info(
        f"[DECLARATION] {start_date} to {end_date}: records={len(active)}/{len(records)}, "
        f"occurrences={len(raw_items)}, items={len(items)}, hours={summary.total_hours}, "
        f"valid={validation.is_valid}"
    )

    return DeclarationResult(items=items, summary=summary, metadata=metadata, validation=validation)
