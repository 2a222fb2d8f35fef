"""Semester week generation.

Walks 7-day strides from the semester start, alternating Odd/Even labels,
and optionally appends extended-program weeks after the regular run.
"""

from datetime import date, timedelta

from loguru import logger

from declaration_engine.config.settings import settings
from declaration_engine.errors import AlreadyExistsError, InvalidRangeError
from declaration_engine.semester.types import (
    WEEK_LENGTH_DAYS,
    SemesterWeek,
    WeekType,
    format_week_number,
)


def parity_for_index(index: int, starting_parity: bool) -> WeekType:
    """Parity of the 0-based week index given week 1's parity (True = Odd)."""
    first = WeekType.ODD if starting_parity else WeekType.EVEN
    return first if index % 2 == 0 else first.flipped()


def generate_semester_weeks(
    start_date: date,
    end_date: date,
    starting_parity: bool = True,
    is_extended_program: bool = False,
    extended_weeks: int | None = None,
    existing: list[SemesterWeek] | None = None,
    overwrite: bool = False,
) -> list[SemesterWeek]:
    """Generate the ordered week sequence of a semester.

    Rules:
    - A week starts every 7 days from start_date while its start is <= end_date
    - Parity alternates, week 1 is Odd when starting_parity is True
    - Weeks are numbered S01, S02, ...
    - Extended programs get extra weeks continuing numbering and parity

    Args:
        start_date: First day of the semester
        end_date: Last day of the semester
        starting_parity: True if week 1 is Odd
        is_extended_program: Append extended weeks after the regular run
        extended_weeks: Number of extended weeks (defaults to settings.extended_weeks)
        existing: Weeks already stored for this semester
        overwrite: Allow replacing a non-empty existing sequence

    Returns:
        Ordered list of SemesterWeek

    Raises:
        InvalidRangeError: If end_date <= start_date
        AlreadyExistsError: If existing is non-empty and overwrite is False
    """
    if end_date <= start_date:
        raise InvalidRangeError(start_date, end_date)

    if existing and not overwrite:
        raise AlreadyExistsError(
            f"Semester already has {len(existing)} week(s); pass overwrite=True to regenerate"
        )

    regular_count = (end_date - start_date).days // WEEK_LENGTH_DAYS + 1
    extra_count = 0
    if is_extended_program:
        extra_count = settings.extended_weeks if extended_weeks is None else extended_weeks
        if extra_count < 0:
            raise ValueError(f"extended_weeks must be >= 0, got {extra_count}")

    weeks: list[SemesterWeek] = []
    for index in range(regular_count + extra_count):
        weeks.append(
            SemesterWeek(
                week_number=format_week_number(index + 1),
                start_date=start_date + timedelta(days=index * WEEK_LENGTH_DAYS),
                week_type=parity_for_index(index, starting_parity),
                is_special=index >= regular_count,
            )
        )

    logger.info(
        f"[WEEK_GENERATOR] Generated {regular_count} regular + {extra_count} extended week(s) "
        f"for {start_date} to {end_date} (week 1 {weeks[0].week_type})"
    )
    return weeks
