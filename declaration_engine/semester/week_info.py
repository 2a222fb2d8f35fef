"""Week lookup for dates inside (or around) a semester."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from pydantic import BaseModel

from declaration_engine.errors import InvalidRangeError
from declaration_engine.semester.types import (
    WEEK_LENGTH_DAYS,
    SemesterConfig,
    SemesterWeek,
    SpecialWeek,
    WeekType,
)


class WeekInfo(BaseModel):
    """Resolved week facts for a single date.

    Attributes:
        week_number: Week label, "" when the owning period has none
        week_type: Parity of the date
        is_special: Date falls in an extended or ad-hoc special week
        start_date: First day of the owning week
        end_date: Last day of the owning week
    """

    week_number: str
    week_type: WeekType
    is_special: bool
    start_date: date
    end_date: date


def find_week_by_number(weeks: Sequence[SemesterWeek], week_number: str) -> SemesterWeek | None:
    for week in weeks:
        if week.week_number == week_number:
            return week
    return None


def find_week_containing(weeks: Sequence[SemesterWeek], day: date) -> SemesterWeek | None:
    for week in weeks:
        if week.contains(day):
            return week
    return None


def get_week_info(
    weeks: Sequence[SemesterWeek],
    day: date,
    special_weeks: Sequence[SpecialWeek] = (),
) -> WeekInfo | None:
    """Resolve the week owning a date.

    Ad-hoc special weeks with a parity override the regular week for their
    dates. Vacation periods carry no parity and are ignored here.

    Returns:
        WeekInfo, or None when no week contains the date
    """
    regular = find_week_containing(weeks, day)
    override = next((sw for sw in special_weeks if sw.week_type is not None and sw.contains(day)), None)

    if override is not None:
        week_number = override.week_number or (regular.week_number if regular else "")
        return WeekInfo(
            week_number=week_number,
            week_type=override.week_type,
            is_special=True,
            start_date=override.start_date,
            end_date=override.last_date,
        )

    if regular is None:
        return None

    return WeekInfo(
        week_number=regular.week_number,
        week_type=regular.week_type,
        is_special=regular.is_special,
        start_date=regular.start_date,
        end_date=regular.end_date,
    )


def extrapolate_parity(weeks: Sequence[SemesterWeek], day: date) -> WeekType | None:
    """Parity of a date no week contains, projected from the closest week start.

    floor(days_since_closest_start / 7) mod 2 == 1 flips the closest week's
    parity. Returns None when there are no weeks to project from.
    """
    if not weeks:
        return None

    closest = min(
        sorted(weeks, key=lambda w: w.start_date),
        key=lambda w: abs((day - w.start_date).days),
    )
    offset = (day - closest.start_date).days // WEEK_LENGTH_DAYS
    if offset % 2 == 0:
        return closest.week_type
    return closest.week_type.flipped()


def get_week_info_for_config(config: SemesterConfig, day: date) -> WeekInfo | None:
    """Resolve the week of a date that must lie inside the semester.

    Raises:
        InvalidRangeError: If the date is outside the semester
    """
    start, end = semester_span(config)
    if day < start or day > end:
        raise InvalidRangeError(
            config.start_date,
            config.end_date,
            f"Date {day} is outside semester {start} to {end}",
        )
    return get_week_info(config.weeks, day, config.special_weeks)


def semester_span(config: SemesterConfig) -> tuple[date, date]:
    """Calendar range of a semester, stretched to cover extended weeks."""
    end = config.end_date
    for week in config.weeks:
        if week.is_special:
            end = max(end, week.start_date + timedelta(days=WEEK_LENGTH_DAYS - 1))
    return config.start_date, end
