"""Calendar module - per-user teaching calendars.

This module provides:
- Calendar day, holiday and special-day types
- Day-by-day calendar building from semester weeks
- Verification of built calendars against the semester weeks
- Manual edits and holiday imports on existing calendars
"""

from declaration_engine.calendar.builder import build_calendar_day, build_calendar_days, index_calendar, iter_dates
from declaration_engine.calendar.editing import EditResult, apply_special_days, import_holidays, merge_special_days
from declaration_engine.calendar.holidays import (
    HolidayProvider,
    HttpHolidayProvider,
    holidays_for_range,
    merge_holiday_lists,
    parse_holiday_payload,
)
from declaration_engine.calendar.types import Calendar, CalendarDay, DayOfWeek, Holiday, SpecialDay
from declaration_engine.calendar.verifier import (
    ConflictRecord,
    DuplicateDateConflict,
    MissingDateConflict,
    ParityMismatchConflict,
    UnknownWeekConflict,
    VerificationResult,
    WeekNumberMismatchConflict,
    find_duplicate_dates,
    verify_calendar,
)

__all__ = [
    "Calendar",
    "CalendarDay",
    "ConflictRecord",
    "DayOfWeek",
    "DuplicateDateConflict",
    "EditResult",
    "Holiday",
    "HolidayProvider",
    "HttpHolidayProvider",
    "MissingDateConflict",
    "ParityMismatchConflict",
    "SpecialDay",
    "UnknownWeekConflict",
    "VerificationResult",
    "WeekNumberMismatchConflict",
    "apply_special_days",
    "build_calendar_day",
    "build_calendar_days",
    "find_duplicate_dates",
    "holidays_for_range",
    "import_holidays",
    "index_calendar",
    "iter_dates",
    "merge_holiday_lists",
    "merge_special_days",
    "parse_holiday_payload",
    "verify_calendar",
]
