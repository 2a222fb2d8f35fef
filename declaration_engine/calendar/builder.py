"""Calendar day builder.

Produces one CalendarDay per date of a range from the semester's week
sequence, public holidays, vacation periods and manual special days.

Precedence per date (lowest to highest):
1. Regular week (containment), or extrapolated parity outside the sequence
2. Ad-hoc special week with a parity
3. Weekend / public holiday / vacation period
4. Manual special day

Pure and re-runnable: calling it again replaces the full day set.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import date, timedelta

from loguru import logger

from declaration_engine.calendar.types import CalendarDay, DayOfWeek, Holiday, SpecialDay
from declaration_engine.errors import InvalidRangeError
from declaration_engine.semester.types import SemesterWeek, SpecialWeek
from declaration_engine.semester.week_info import extrapolate_parity, get_week_info


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date in [start_date, end_date]."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def _holiday_map(holidays: Iterable[Holiday], start_date: date, end_date: date) -> dict[date, str]:
    by_date: dict[date, str] = {}
    skipped = 0
    for holiday in holidays:
        if holiday.date < start_date or holiday.date > end_date:
            skipped += 1
            continue
        # First name wins when the source lists a date twice
        by_date.setdefault(holiday.date, holiday.name)
    if skipped:
        logger.debug(f"[CALENDAR_BUILDER] Ignored {skipped} holiday(s) outside {start_date} to {end_date}")
    return by_date


def build_calendar_day(
    day: date,
    weeks: Sequence[SemesterWeek],
    holiday_name: str | None = None,
    special_weeks: Sequence[SpecialWeek] = (),
    special_day: SpecialDay | None = None,
) -> CalendarDay:
    """Build the CalendarDay of a single date.

    Args:
        day: Date to build
        weeks: Semester week sequence
        holiday_name: Public holiday name if the date is a holiday
        special_weeks: Ad-hoc special weeks and vacation periods
        special_day: Manual override for the date

    Returns:
        CalendarDay honoring the weekend/holiday non-working invariant
    """
    week_info = get_week_info(weeks, day, special_weeks)
    if week_info is not None:
        odd_even = week_info.week_type
        semester_week = week_info.week_number
    else:
        odd_even = extrapolate_parity(weeks, day)
        semester_week = ""

    day_of_week = DayOfWeek.from_date(day)
    is_holiday = False
    name = ""

    if holiday_name is not None:
        is_holiday = True
        name = holiday_name
    else:
        vacation = next((sw for sw in special_weeks if sw.is_vacation and sw.contains(day)), None)
        if vacation is not None:
            is_holiday = True
            name = vacation.name

    is_working_day = not is_holiday and not day_of_week.is_weekend

    if special_day is not None:
        is_holiday = special_day.is_holiday
        name = special_day.name or name
        is_working_day = special_day.is_working_day and not is_holiday and not day_of_week.is_weekend

    return CalendarDay(
        date=day,
        day_of_week=day_of_week,
        is_working_day=is_working_day,
        odd_even=odd_even,
        semester_week=semester_week,
        is_holiday=is_holiday,
        holiday_name=name,
    )


def build_calendar_days(
    start_date: date,
    end_date: date,
    weeks: Sequence[SemesterWeek],
    holidays: Iterable[Holiday] = (),
    special_weeks: Sequence[SpecialWeek] = (),
    special_days: Iterable[SpecialDay] = (),
) -> list[CalendarDay]:
    """Build one CalendarDay per date in [start_date, end_date].

    Dates no week contains get their parity extrapolated from the closest
    week start so parity stays consistent across gaps. Holidays and special
    days outside the range are ignored.

    Args:
        start_date: First date of the calendar
        end_date: Last date of the calendar
        weeks: Semester week sequence
        holidays: Public holidays
        special_weeks: Ad-hoc special weeks and vacation periods
        special_days: Manual overrides, later entries win for the same date

    Returns:
        Days ordered by date, exactly (end_date - start_date).days + 1 of them

    Raises:
        InvalidRangeError: If end_date < start_date
    """
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)

    holiday_by_date = _holiday_map(holidays, start_date, end_date)
    special_by_date = {sd.date: sd for sd in special_days if start_date <= sd.date <= end_date}

    days = [
        build_calendar_day(
            day,
            weeks,
            holiday_name=holiday_by_date.get(day),
            special_weeks=special_weeks,
            special_day=special_by_date.get(day),
        )
        for day in iter_dates(start_date, end_date)
    ]

    working = sum(1 for d in days if d.is_working_day)
    logger.info(
        f"[CALENDAR_BUILDER] Built {len(days)} day(s) for {start_date} to {end_date}: "
        f"working={working}, holidays={sum(1 for d in days if d.is_holiday)}, "
        f"overrides={len(special_by_date)}"
    )
    return days


def index_calendar(days: Iterable[CalendarDay]) -> dict[date, CalendarDay]:
    """Index calendar days by date for O(1) lookup.

    The first entry wins when a date appears more than once; run the
    verifier to surface such duplicates.
    """
    index: dict[date, CalendarDay] = {}
    duplicates = 0
    for day in days:
        if day.date in index:
            duplicates += 1
            continue
        index[day.date] = day
    if duplicates:
        logger.warning(f"[CALENDAR_BUILDER] Calendar index skipped {duplicates} duplicate date(s)")
    return index
