"""Recurrence expansion of teaching-hour records.

The calendar is the single source of truth for parity, week numbers and
working days. The matcher never re-derives any of them: it is a pure
predicate over calendar-day attributes and record attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from declaration_engine.calendar.builder import iter_dates
from declaration_engine.calendar.types import CalendarDay
from declaration_engine.errors import InvalidRangeError
from declaration_engine.teaching.types import TeachingHourRecord


@dataclass(frozen=True)
class Occurrence:
    """A date on which a record's weekly pattern fires."""

    date: date
    record: TeachingHourRecord
    day: CalendarDay


def matches_pattern(record: TeachingHourRecord, day: CalendarDay | None) -> bool:
    """Decide whether a record's weekly pattern fires on a calendar day.

    All must hold:
    1. The day exists, is a working day and is not a holiday
    2. Weekday equals the record's day_of_week
    3. A record parity, when set, equals the day's parity
    4. A special record's week equals the day's semester week

    Args:
        record: Recurring teaching-hour record
        day: Calendar day of the candidate date, None if not in the calendar

    Returns:
        True if the commitment occurs on that day
    """
    if day is None:
        return False
    if not day.is_working_day or day.is_holiday:
        return False
    if day.day_of_week != record.day_of_week:
        return False
    if record.odd_even is not None and record.odd_even != day.odd_even:
        return False
    if record.is_special and day.semester_week != record.special_week:
        return False
    return True


def expand_record(
    record: TeachingHourRecord,
    calendar_index: Mapping[date, CalendarDay],
    start_date: date,
    end_date: date,
) -> list[Occurrence]:
    """List the dates of [start_date, end_date] on which a record occurs.

    Args:
        record: Recurring teaching-hour record
        calendar_index: Calendar days keyed by date
        start_date: Period start
        end_date: Period end

    Returns:
        Occurrences in date order

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)

    occurrences: list[Occurrence] = []
    for current in iter_dates(start_date, end_date):
        day = calendar_index.get(current)
        if matches_pattern(record, day):
            occurrences.append(Occurrence(date=current, record=record, day=day))
    return occurrences
