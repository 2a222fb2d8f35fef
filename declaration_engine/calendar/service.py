"""Calendar orchestration service.

Loads snapshots from the stores, runs the pure semester and calendar
functions and saves the results back. Regenerating a calendar bumps its
version and marks every declaration built from an older version as stale.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from loguru import logger

from declaration_engine.calendar.builder import build_calendar_days
from declaration_engine.calendar.editing import apply_special_days, import_holidays, merge_special_days
from declaration_engine.calendar.holidays import HolidayProvider, holidays_for_range, merge_holiday_lists
from declaration_engine.calendar.types import Calendar, Holiday, SpecialDay
from declaration_engine.calendar.verifier import VerificationResult, verify_calendar
from declaration_engine.config.settings import settings
from declaration_engine.errors import AlreadyExistsError, NotFoundError, PeriodTooLongError
from declaration_engine.persistence.stores import CalendarStore, DeclarationStore, SemesterConfigStore
from declaration_engine.semester.types import SemesterConfig
from declaration_engine.semester.week_generator import generate_semester_weeks
from declaration_engine.semester.week_info import semester_span


def ensure_period_within_limit(start_date: date, end_date: date, max_days: int | None = None) -> None:
    """Reject periods longer than settings.max_period_days.

    Raises:
        PeriodTooLongError: If the inclusive period exceeds the limit
    """
    limit = settings.max_period_days if max_days is None else max_days
    if (end_date - start_date).days + 1 > limit:
        raise PeriodTooLongError(start_date, end_date, limit)


def load_semester_config(
    config_store: SemesterConfigStore, faculty: str, academic_year: str, semester: int
) -> SemesterConfig:
    config = config_store.load(faculty, academic_year, semester)
    if config is None:
        raise NotFoundError(f"No semester configuration for {faculty} {academic_year} semester {semester}")
    return config


def load_calendar(calendar_store: CalendarStore, user_id: str, academic_year: str, semester: int) -> Calendar:
    calendar = calendar_store.load(user_id, academic_year, semester)
    if calendar is None:
        raise NotFoundError(f"No calendar for user {user_id} {academic_year} semester {semester}")
    return calendar


def mark_stale_declarations(declaration_store: DeclarationStore, calendar: Calendar) -> int:
    """Flag declarations built from an older calendar version.

    Returns:
        Number of declarations newly marked stale
    """
    marked = 0
    for declaration in declaration_store.list_declarations(*calendar.key):
        if declaration.stale or declaration.calendar_version >= calendar.version:
            continue
        declaration_store.save(declaration.model_copy(update={"stale": True}))
        marked += 1
    if marked:
        logger.warning(
            f"[CALENDAR_SERVICE] Marked {marked} declaration(s) stale for user_id={calendar.user_id}, "
            f"calendar version {calendar.version}"
        )
    return marked


def _save_new_version(
    calendar_store: CalendarStore,
    calendar: Calendar,
    declaration_store: DeclarationStore | None,
) -> Calendar:
    calendar.version += 1
    calendar.status = "editing"
    calendar_store.save(calendar)
    if declaration_store is not None:
        mark_stale_declarations(declaration_store, calendar)
    return calendar


def generate_weeks_for_semester(
    config_store: SemesterConfigStore,
    faculty: str,
    academic_year: str,
    semester: int,
    overwrite: bool = False,
) -> SemesterConfig:
    """Generate and store the week sequence of a semester configuration.

    Raises:
        NotFoundError: If the configuration does not exist
        AlreadyExistsError: If weeks exist and overwrite is False
    """
    config = load_semester_config(config_store, faculty, academic_year, semester)
    config.weeks = generate_semester_weeks(
        config.start_date,
        config.end_date,
        starting_parity=config.starting_parity,
        is_extended_program=config.is_extended_program,
        existing=config.weeks,
        overwrite=overwrite,
    )
    config.version += 1
    config_store.save(config)
    logger.info(
        f"[CALENDAR_SERVICE] Stored {len(config.weeks)} weeks for {faculty} {academic_year} "
        f"semester {semester} (version {config.version})"
    )
    return config


def generate_calendar(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    user_id: str,
    faculty: str,
    academic_year: str,
    semester: int,
    holidays: Iterable[Holiday] = (),
    special_days: Iterable[SpecialDay] = (),
    start_date: date | None = None,
    end_date: date | None = None,
    overwrite: bool = False,
    declaration_store: DeclarationStore | None = None,
) -> Calendar:
    """Build and store a user's calendar from the semester weeks.

    The holidays and special days stored on an existing calendar are
    replayed, so manual entries survive a regeneration. Special days passed
    here replace stored ones with the same date.

    Args:
        config_store: Semester configuration store
        calendar_store: Calendar store
        user_id: Calendar owner
        faculty: Faculty of the semester configuration
        academic_year: Academic year
        semester: Semester number
        holidays: Holidays to mark
        special_days: Manual overrides, applied last
        start_date: Calendar start (defaults to the semester start)
        end_date: Calendar end (defaults to the semester end, extended weeks included)
        overwrite: Replace an existing calendar
        declaration_store: When given, older declarations are marked stale

    Returns:
        The stored calendar

    Raises:
        NotFoundError: If the configuration is missing or has no weeks
        AlreadyExistsError: If a calendar with days exists and overwrite is False
        InvalidRangeError: If end_date < start_date
        PeriodTooLongError: If the range exceeds settings.max_period_days
    """
    config = load_semester_config(config_store, faculty, academic_year, semester)
    if not config.weeks:
        raise NotFoundError(f"Semester {faculty} {academic_year} semester {semester} has no generated weeks")

    default_start, default_end = semester_span(config)
    start = start_date or default_start
    end = end_date or default_end
    ensure_period_within_limit(start, end)

    existing = calendar_store.load(user_id, academic_year, semester)
    if existing is not None and existing.days and not overwrite:
        raise AlreadyExistsError(f"Calendar for user {user_id} {academic_year} semester {semester} already exists")

    stored_holidays = existing.holidays if existing is not None else []
    stored_special_days = existing.special_days if existing is not None else []
    holiday_list = merge_holiday_lists(holidays, stored_holidays)
    special_day_list = merge_special_days(stored_special_days, special_days)

    days = build_calendar_days(
        start,
        end,
        config.weeks,
        holidays=holiday_list,
        special_weeks=config.special_weeks,
        special_days=special_day_list,
    )

    calendar = Calendar(
        user_id=user_id,
        academic_year=academic_year,
        semester=semester,
        faculty=config.faculty,
        start_date=start,
        end_date=end,
        days=days,
        holidays=holiday_list,
        special_days=special_day_list,
        semester_version=config.version,
        version=existing.version if existing is not None else 0,
    )
    _save_new_version(calendar_store, calendar, declaration_store)
    logger.info(
        f"[CALENDAR_SERVICE] Generated calendar for user_id={user_id}: {start} to {end}, "
        f"{len(days)} days, version {calendar.version}"
    )
    return calendar


def verify_user_calendar(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    user_id: str,
    academic_year: str,
    semester: int,
) -> VerificationResult:
    """Verify a stored calendar and mark it verified when it passes.

    Raises:
        NotFoundError: If the calendar or its semester configuration is missing
    """
    calendar = load_calendar(calendar_store, user_id, academic_year, semester)
    config = load_semester_config(config_store, calendar.faculty, academic_year, semester)

    if calendar.semester_version != config.version:
        logger.warning(
            f"[CALENDAR_SERVICE] Calendar for user_id={user_id} was built from semester version "
            f"{calendar.semester_version}, current is {config.version}"
        )

    result = verify_calendar(
        calendar.days,
        config.weeks,
        start_date=calendar.start_date,
        end_date=calendar.end_date,
        special_weeks=config.special_weeks,
    )
    if result.valid and calendar.status != "verified":
        calendar.status = "verified"
        calendar_store.save(calendar)
    return result


def add_special_days(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    user_id: str,
    academic_year: str,
    semester: int,
    special_days: Iterable[SpecialDay],
    declaration_store: DeclarationStore | None = None,
) -> Calendar:
    """Apply manual special days to a stored calendar.

    The overrides are stored on the calendar so a regeneration replays
    them. The calendar returns to "editing" and needs verifying again.
    """
    calendar = load_calendar(calendar_store, user_id, academic_year, semester)
    config = load_semester_config(config_store, calendar.faculty, academic_year, semester)

    special_days = list(special_days)
    result = apply_special_days(calendar.days, special_days, config.weeks, config.special_weeks)
    if not result.changed:
        return calendar
    calendar.days = result.days
    calendar.special_days = merge_special_days(calendar.special_days, special_days)
    return _save_new_version(calendar_store, calendar, declaration_store)


def import_calendar_holidays(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    provider: HolidayProvider,
    user_id: str,
    academic_year: str,
    semester: int,
    declaration_store: DeclarationStore | None = None,
) -> Calendar:
    """Fetch holidays for the calendar's range and merge the new ones.

    Raises:
        HolidaySourceError: If the provider fails
    """
    calendar = load_calendar(calendar_store, user_id, academic_year, semester)
    config = load_semester_config(config_store, calendar.faculty, academic_year, semester)

    holidays = holidays_for_range(provider, calendar.start_date, calendar.end_date)
    result = import_holidays(calendar.days, holidays, config.weeks, config.special_weeks)
    if not result.changed:
        return calendar
    calendar.days = result.days
    calendar.holidays = merge_holiday_lists(calendar.holidays, holidays)
    _save_new_version(calendar_store, calendar, declaration_store)
    logger.info(f"[CALENDAR_SERVICE] Imported {result.changed} holiday(s) for user_id={user_id}")
    return calendar
