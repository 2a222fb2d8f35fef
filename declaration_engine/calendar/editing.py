"""Manual edits on an already built calendar.

Special days (exam days, local closures) and late holiday imports are
applied by date key: an existing day is overwritten in place, a missing
date gets a freshly built day. Duplicates are never created. All
functions return new lists and leave their input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from loguru import logger

from declaration_engine.calendar.builder import build_calendar_day
from declaration_engine.calendar.types import CalendarDay, Holiday, SpecialDay
from declaration_engine.semester.types import SemesterWeek, SpecialWeek


@dataclass
class EditResult:
    """Days after an edit and how many dates changed."""

    days: list[CalendarDay]
    changed: int


def _override(day: CalendarDay, special_day: SpecialDay) -> CalendarDay:
    is_holiday = special_day.is_holiday
    is_working_day = special_day.is_working_day and not is_holiday and not day.day_of_week.is_weekend
    return CalendarDay(
        date=day.date,
        day_of_week=day.day_of_week,
        is_working_day=is_working_day,
        odd_even=day.odd_even,
        semester_week=day.semester_week,
        is_holiday=is_holiday,
        holiday_name=special_day.name or day.holiday_name,
    )


def merge_special_days(*lists: Iterable[SpecialDay]) -> list[SpecialDay]:
    """Merge special-day lists by date, later lists win."""
    by_date: dict[date, SpecialDay] = {}
    for special_days in lists:
        for special_day in special_days:
            by_date[special_day.date] = special_day
    return sorted(by_date.values(), key=lambda sd: sd.date)


def apply_special_days(
    days: Sequence[CalendarDay],
    special_days: Iterable[SpecialDay],
    weeks: Sequence[SemesterWeek] = (),
    special_weeks: Sequence[SpecialWeek] = (),
) -> EditResult:
    """Apply manual special days to a calendar.

    Existing days keep their parity and week number; dates not yet in the
    calendar are built from the week sequence.

    Args:
        days: Current calendar days
        special_days: Overrides to apply, later entries win for the same date
        weeks: Semester weeks, used for dates missing from the calendar
        special_weeks: Ad-hoc special weeks, used for dates missing from the calendar

    Returns:
        EditResult with days sorted by date
    """
    by_date = {day.date: day for day in days}
    changed: set[date] = set()

    for special_day in special_days:
        existing = by_date.get(special_day.date)
        if existing is None:
            by_date[special_day.date] = build_calendar_day(
                special_day.date,
                weeks,
                special_weeks=special_weeks,
                special_day=special_day,
            )
        else:
            by_date[special_day.date] = _override(existing, special_day)
        changed.add(special_day.date)

    logger.info(f"[CALENDAR_EDIT] Applied {len(changed)} special day(s)")
    return EditResult(days=sorted(by_date.values(), key=lambda d: d.date), changed=len(changed))


def import_holidays(
    days: Sequence[CalendarDay],
    holidays: Iterable[Holiday],
    weeks: Sequence[SemesterWeek] = (),
    special_weeks: Sequence[SpecialWeek] = (),
) -> EditResult:
    """Merge imported holidays into a calendar.

    Dates already marked as holidays are left alone, so re-importing the
    same list is a no-op.

    Returns:
        EditResult whose changed count is the number of newly imported holidays
    """
    existing_holidays = {day.date for day in days if day.is_holiday}
    to_apply: list[SpecialDay] = []
    for holiday in holidays:
        if holiday.date in existing_holidays:
            continue
        existing_holidays.add(holiday.date)
        to_apply.append(SpecialDay(date=holiday.date, name=holiday.name, is_holiday=True))

    if not to_apply:
        logger.info("[CALENDAR_EDIT] No new holidays to import")
        return EditResult(days=sorted(days, key=lambda d: d.date), changed=0)

    return apply_special_days(days, to_apply, weeks=weeks, special_weeks=special_weeks)
