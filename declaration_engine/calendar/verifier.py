"""Calendar verification.

Read-only consistency gate run before a calendar feeds declaration
generation. Every conflict is collected and returned together; nothing
short-circuits and the calendar is never mutated.

Checks, in order:
1. Duplicate dates
2. Parity mismatch against the semester's week definitions
3. Week numbers the semester does not define
4. Week number disagreeing with the week that contains the date
5. Dates of the expected range with no calendar day
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import date as date_type
from typing import Annotated, Literal

from loguru import logger
from pydantic import BaseModel, Field

from declaration_engine.calendar.builder import iter_dates
from declaration_engine.calendar.types import CalendarDay
from declaration_engine.semester.types import OptionalWeekType, SemesterWeek, SpecialWeek, WeekType
from declaration_engine.semester.week_info import get_week_info


class DuplicateDateConflict(BaseModel):
    """A date appearing more than once in a calendar."""

    kind: Literal["duplicate_date"] = "duplicate_date"
    date: date_type = Field(description="Duplicated date")
    count: int = Field(description="Number of entries for the date")


class ParityMismatchConflict(BaseModel):
    """A day whose parity disagrees with its semester week."""

    kind: Literal["parity_mismatch"] = "parity_mismatch"
    date: date_type = Field(description="Date of the day")
    semester_week: str = Field(description="Week number recorded on the day")
    expected: WeekType = Field(description="Parity defined by the semester")
    actual: OptionalWeekType = Field(default=None, description="Parity recorded on the day")


class UnknownWeekConflict(BaseModel):
    """A day referencing a week number the semester does not define."""

    kind: Literal["unknown_week"] = "unknown_week"
    date: date_type = Field(description="Date of the day")
    semester_week: str = Field(description="Undefined week number")


class WeekNumberMismatchConflict(BaseModel):
    """A day whose week number differs from the week containing its date."""

    kind: Literal["week_number_mismatch"] = "week_number_mismatch"
    date: date_type = Field(description="Date of the day")
    expected: str = Field(description="Week number of the containing week")
    actual: str = Field(description="Week number recorded on the day")


class MissingDateConflict(BaseModel):
    """A date of the calendar range without a calendar day."""

    kind: Literal["missing_date"] = "missing_date"
    date: date_type = Field(description="Missing date")


ConflictRecord = Annotated[
    DuplicateDateConflict
    | ParityMismatchConflict
    | UnknownWeekConflict
    | WeekNumberMismatchConflict
    | MissingDateConflict,
    Field(discriminator="kind"),
]


class VerificationResult(BaseModel):
    """Outcome of a calendar verification.

    Attributes:
        valid: True when no conflict was found
        errors: Every conflict, grouped by check in check order
    """

    valid: bool
    errors: list[ConflictRecord] = Field(default_factory=list)

    def of_kind(self, kind: str) -> list[ConflictRecord]:
        return [conflict for conflict in self.errors if conflict.kind == kind]


def _parity_by_week_number(
    weeks: Sequence[SemesterWeek],
    special_weeks: Sequence[SpecialWeek],
) -> dict[str, WeekType]:
    parity: dict[str, WeekType] = {week.week_number: week.week_type for week in weeks}
    for special in special_weeks:
        if special.week_number and special.week_type is not None:
            parity[special.week_number] = special.week_type
    return parity


def find_duplicate_dates(days: Sequence[CalendarDay]) -> list[DuplicateDateConflict]:
    counts = Counter(day.date for day in days)
    return [
        DuplicateDateConflict(date=day_date, count=count)
        for day_date, count in counts.items()
        if count > 1
    ]


def verify_calendar(
    days: Sequence[CalendarDay],
    weeks: Sequence[SemesterWeek],
    start_date: date_type | None = None,
    end_date: date_type | None = None,
    special_weeks: Sequence[SpecialWeek] = (),
) -> VerificationResult:
    """Verify a built calendar against its semester's week definitions.

    Days with an empty week number lie outside the week sequence and are
    only checked for duplicates and week-number containment.

    Args:
        days: Calendar days to verify
        weeks: Authoritative semester week list
        start_date: Optional calendar range start (enables missing-date check)
        end_date: Optional calendar range end (enables missing-date check)
        special_weeks: Ad-hoc special weeks overriding parity

    Returns:
        VerificationResult with all conflicts found
    """
    parity_by_number = _parity_by_week_number(weeks, special_weeks)

    duplicates = find_duplicate_dates(days)
    parity_conflicts: list[ParityMismatchConflict] = []
    unknown_weeks: list[UnknownWeekConflict] = []
    number_conflicts: list[WeekNumberMismatchConflict] = []

    for day in days:
        containing = get_week_info(weeks, day.date, special_weeks)

        if containing is not None and containing.week_number != day.semester_week:
            number_conflicts.append(
                WeekNumberMismatchConflict(
                    date=day.date,
                    expected=containing.week_number,
                    actual=day.semester_week,
                )
            )

        if not day.semester_week:
            continue

        if containing is not None and containing.week_number == day.semester_week:
            expected = containing.week_type
        elif day.semester_week in parity_by_number:
            expected = parity_by_number[day.semester_week]
        else:
            unknown_weeks.append(UnknownWeekConflict(date=day.date, semester_week=day.semester_week))
            continue

        if day.odd_even != expected:
            parity_conflicts.append(
                ParityMismatchConflict(
                    date=day.date,
                    semester_week=day.semester_week,
                    expected=expected,
                    actual=day.odd_even,
                )
            )

    missing: list[MissingDateConflict] = []
    if start_date is not None and end_date is not None:
        present = {day.date for day in days}
        missing = [MissingDateConflict(date=d) for d in iter_dates(start_date, end_date) if d not in present]

    errors: list[ConflictRecord] = [*duplicates, *parity_conflicts, *unknown_weeks, *number_conflicts, *missing]

    if errors:
        logger.warning(
            f"[CALENDAR_VERIFIER] {len(errors)} conflict(s): duplicates={len(duplicates)}, "
            f"parity={len(parity_conflicts)}, unknown_weeks={len(unknown_weeks)}, "
            f"week_numbers={len(number_conflicts)}, missing={len(missing)}"
        )
    else:
        logger.info(f"[CALENDAR_VERIFIER] Calendar with {len(days)} day(s) verified")

    return VerificationResult(valid=not errors, errors=errors)
