"""Calendar day types.

A calendar holds exactly one CalendarDay per date of its range. Each day
carries the facts the pattern matcher relies on: weekday, parity, week
number and whether teaching can happen on it.
"""

from __future__ import annotations

from datetime import date as date_type
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from declaration_engine.semester.types import OptionalWeekType

CalendarStatus = Literal["editing", "verified"]


class DayOfWeek(StrEnum):
    """Day of the week, ordered like date.weekday()."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, day: date_type) -> DayOfWeek:
        return _WEEKDAYS[day.weekday()]

    @property
    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)


_WEEKDAYS = list(DayOfWeek)


class Holiday(BaseModel):
    """Public holiday from the holiday source."""

    date: date_type
    name: str = ""


class SpecialDay(BaseModel):
    """Manual calendar override (exam day, local closure, make-up day).

    Attributes:
        date: Overridden date
        name: Label shown as the day's holiday name
        is_working_day: Whether teaching happens (forced False on weekends/holidays)
        is_holiday: Mark the day as a holiday
    """

    date: date_type
    name: str = ""
    is_working_day: bool = False
    is_holiday: bool = True


class CalendarDay(BaseModel):
    """One date of a calendar.

    Attributes:
        date: Date (unique within a calendar)
        day_of_week: Weekday of the date
        is_working_day: Teaching can happen on this date
        odd_even: Parity of the date, None when unknown
        semester_week: Week label (S01...), "" outside the week sequence
        is_holiday: Date is a holiday or closure
        holiday_name: Holiday or closure label
    """

    date: date_type
    day_of_week: DayOfWeek
    is_working_day: bool = True
    odd_even: OptionalWeekType = None
    semester_week: str = ""
    is_holiday: bool = False
    holiday_name: str = ""

    @model_validator(mode="after")
    def _check_invariants(self) -> CalendarDay:
        if self.day_of_week != DayOfWeek.from_date(self.date):
            raise ValueError(f"{self.date} is a {DayOfWeek.from_date(self.date)}, not a {self.day_of_week}")
        if self.is_working_day and (self.is_holiday or self.day_of_week.is_weekend):
            raise ValueError(f"{self.date} cannot be a working day: holidays and weekends are non-working")
        return self


class Calendar(BaseModel):
    """A user's calendar for one semester.

    Attributes:
        user_id: Calendar owner
        academic_year: Academic year, "YYYY/YYYY"
        semester: Semester number (1 or 2)
        faculty: Faculty whose semester configuration drives the calendar
        start_date: First day of the calendar
        end_date: Last day of the calendar
        days: One entry per date
        holidays: Holidays the days were built with, replayed on regeneration
        special_days: Manual overrides, replayed on regeneration
        status: "verified" once the verifier passed on the current days
        semester_version: Version of the semester weeks the days were built from
        version: Incremented on every regeneration
    """

    user_id: str
    academic_year: str = Field(pattern=r"^\d{4}/\d{4}$")
    semester: Literal[1, 2]
    faculty: str
    start_date: date_type
    end_date: date_type
    days: list[CalendarDay] = Field(default_factory=list)
    holidays: list[Holiday] = Field(default_factory=list)
    special_days: list[SpecialDay] = Field(default_factory=list)
    status: CalendarStatus = "editing"
    semester_version: int = 0
    version: int = 0

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.user_id, self.academic_year, self.semester)

    @property
    def title(self) -> str:
        """Calendar title, e.g. "Calendar - October - December 2024"."""
        start_month = self.start_date.strftime("%B")
        end_month = self.end_date.strftime("%B")
        if (self.start_date.year, self.start_date.month) == (self.end_date.year, self.end_date.month):
            return f"Calendar - {start_month} {self.start_date.year}"
        return f"Calendar - {start_month} - {end_month} {self.start_date.year}"
