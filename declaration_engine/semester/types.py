"""Semester structure types.

A semester is an ordered run of 7-day teaching weeks labelled Odd/Even.
Extended programs append extra weeks after the regular run, and ad-hoc
special weeks (vacations, closures, make-up weeks) overlay date ranges.
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator

WEEK_NUMBER_PATTERN = r"^S\d{2,}$"
WEEK_LENGTH_DAYS = 7


class WeekType(StrEnum):
    """Parity label of a teaching week."""

    EVEN = "Even"
    ODD = "Odd"

    def flipped(self) -> WeekType:
        return WeekType.EVEN if self is WeekType.ODD else WeekType.ODD


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# "" from upstream data means "no parity"
OptionalWeekType = Annotated[WeekType | None, BeforeValidator(_blank_to_none)]

SemesterStatus = Literal["draft", "active", "archived"]


def format_week_number(index: int) -> str:
    """Format a 1-based week index as S01, S02, ..."""
    return f"S{index:02d}"


class SemesterWeek(BaseModel):
    """One 7-day teaching week.

    Attributes:
        week_number: Week label (S01, S02, ...)
        start_date: First day of the week
        week_type: Parity of the week
        is_special: True for weeks appended for extended programs
    """

    week_number: str = Field(pattern=WEEK_NUMBER_PATTERN)
    start_date: date
    week_type: WeekType
    is_special: bool = False

    model_config = {"frozen": True}

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=WEEK_LENGTH_DAYS - 1)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class SpecialWeek(BaseModel):
    """Ad-hoc period overlaying the regular week sequence.

    With a week_type the period is a teaching week that overrides the
    regular week's parity (and week number, when given). Without one it is a
    vacation/closure: every date in range is non-working.

    Attributes:
        name: Human-readable label ("Winter vacation", "Clinical week")
        start_date: First day of the period
        end_date: Last day of the period (defaults to a 7-day span)
        week_number: Optional week label the period's days carry
        week_type: Parity of the period, None for closures
    """

    name: str = ""
    start_date: date
    end_date: date | None = None
    week_number: str | None = Field(default=None, pattern=WEEK_NUMBER_PATTERN)
    week_type: OptionalWeekType = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> SpecialWeek:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(f"Special week end_date ({self.end_date}) must be >= start_date ({self.start_date})")
        return self

    @property
    def last_date(self) -> date:
        if self.end_date is not None:
            return self.end_date
        return self.start_date + timedelta(days=WEEK_LENGTH_DAYS - 1)

    @property
    def is_vacation(self) -> bool:
        return self.week_type is None

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.last_date


class SemesterConfig(BaseModel):
    """Semester definition for one faculty, academic year and semester.

    Attributes:
        faculty: Faculty name
        academic_year: Academic year, "YYYY/YYYY"
        semester: Semester number (1 or 2)
        start_date: First day of the semester
        end_date: Last day of the semester
        starting_parity: True when week 1 is Odd
        is_extended_program: Program needs weeks beyond the regular run
        weeks: Generated week sequence (regular and extended)
        special_weeks: Ad-hoc overlay periods
        status: Configuration lifecycle status
        version: Incremented each time the weeks are regenerated
    """

    faculty: str = Field(min_length=1)
    academic_year: str = Field(pattern=r"^\d{4}/\d{4}$")
    semester: Literal[1, 2]
    start_date: date
    end_date: date
    starting_parity: bool = True
    is_extended_program: bool = False
    weeks: list[SemesterWeek] = Field(default_factory=list)
    special_weeks: list[SpecialWeek] = Field(default_factory=list)
    status: SemesterStatus = "draft"
    version: int = 0

    @field_validator("faculty")
    @classmethod
    def _strip_faculty(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def _check_dates(self) -> SemesterConfig:
        if self.end_date <= self.start_date:
            raise ValueError(f"Semester end_date ({self.end_date}) must be after start_date ({self.start_date})")
        return self

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.faculty, self.academic_year, self.semester)
