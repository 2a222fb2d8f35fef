"""Root conftest for all tests.

Shared fixtures model the reference semester: academic year 2024/2025,
semester 1, starting Tuesday 2024-10-01 with an Odd first week and three
generated weeks (S01 Odd, S02 Even, S03 Odd).
"""

from datetime import date

import pytest

from declaration_engine.calendar.builder import build_calendar_days, index_calendar
from declaration_engine.calendar.types import Calendar, CalendarDay, DayOfWeek
from declaration_engine.persistence.memory import (
    InMemoryCalendarStore,
    InMemoryDeclarationStore,
    InMemorySemesterConfigStore,
    InMemoryTeachingHoursStore,
)
from declaration_engine.semester.types import SemesterConfig, SemesterWeek
from declaration_engine.semester.week_generator import generate_semester_weeks
from declaration_engine.teaching.types import ActivityType, HourKind, TeachingHourRecord

SEMESTER_START = date(2024, 10, 1)
SEMESTER_END = date(2024, 10, 21)
USER_ID = "teacher-1"
FACULTY = "Medicine"
ACADEMIC_YEAR = "2024/2025"


@pytest.fixture
def semester_weeks() -> list[SemesterWeek]:
    return generate_semester_weeks(SEMESTER_START, SEMESTER_END, starting_parity=True)


@pytest.fixture
def semester_config(semester_weeks) -> SemesterConfig:
    return SemesterConfig(
        faculty=FACULTY,
        academic_year=ACADEMIC_YEAR,
        semester=1,
        start_date=SEMESTER_START,
        end_date=SEMESTER_END,
        starting_parity=True,
        weeks=semester_weeks,
        version=1,
    )


@pytest.fixture
def calendar_days(semester_weeks) -> list[CalendarDay]:
    return build_calendar_days(SEMESTER_START, SEMESTER_END, semester_weeks)


@pytest.fixture
def calendar_index(calendar_days) -> dict[date, CalendarDay]:
    return index_calendar(calendar_days)


@pytest.fixture
def make_record():
    """Factory for verified teaching-hour records with sensible defaults."""

    def _make(**overrides) -> TeachingHourRecord:
        data = {
            "user_id": USER_ID,
            "faculty": FACULTY,
            "department": "Anatomy",
            "academic_year": ACADEMIC_YEAR,
            "semester": 1,
            "post_number": 1,
            "post_grade": "Lect",
            "discipline_name": "Anatomy",
            "group": "MG1",
            "day_of_week": DayOfWeek.TUESDAY,
            "odd_even": "Odd",
            "activity_type": ActivityType.LR,
            "hour_kind": HourKind.COURSE,
            "hours": 2,
            "status": "verified",
        }
        data.update(overrides)
        return TeachingHourRecord(**data)

    return _make


@pytest.fixture
def config_store(semester_config) -> InMemorySemesterConfigStore:
    store = InMemorySemesterConfigStore()
    store.save(semester_config)
    return store


@pytest.fixture
def calendar_store(calendar_days, semester_config) -> InMemoryCalendarStore:
    store = InMemoryCalendarStore()
    store.save(
        Calendar(
            user_id=USER_ID,
            academic_year=ACADEMIC_YEAR,
            semester=1,
            faculty=FACULTY,
            start_date=SEMESTER_START,
            end_date=SEMESTER_END,
            days=calendar_days,
            semester_version=semester_config.version,
            version=1,
        )
    )
    return store


@pytest.fixture
def declaration_store() -> InMemoryDeclarationStore:
    return InMemoryDeclarationStore()


@pytest.fixture
def hours_store() -> InMemoryTeachingHoursStore:
    return InMemoryTeachingHoursStore()
