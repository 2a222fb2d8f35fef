"""Declaration orchestration service.

Preview runs the whole pipeline read-only: verify the stored calendar,
expand the user's records and aggregate. Finalize repeats the preview,
refuses invalid results, stores the declaration and locks the records it
consumed against further edits.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from loguru import logger

from declaration_engine.calendar.builder import index_calendar
from declaration_engine.calendar.service import ensure_period_within_limit, load_calendar, load_semester_config
from declaration_engine.calendar.types import Calendar
from declaration_engine.calendar.verifier import verify_calendar
from declaration_engine.declarations.aggregator import aggregate_declaration
from declaration_engine.declarations.coefficients import CoefficientTable
from declaration_engine.declarations.types import Declaration, DeclarationResult, declaration_title
from declaration_engine.errors import CalendarIntegrityError, InvalidRangeError
from declaration_engine.persistence.stores import (
    CalendarStore,
    DeclarationStore,
    SemesterConfigStore,
    TeachingHoursStore,
)
from declaration_engine.teaching.validators import mark_processed


def _verified_calendar(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    user_id: str,
    academic_year: str,
    semester: int,
) -> Calendar:
    calendar = load_calendar(calendar_store, user_id, academic_year, semester)
    config = load_semester_config(config_store, calendar.faculty, academic_year, semester)
    result = verify_calendar(
        calendar.days,
        config.weeks,
        start_date=calendar.start_date,
        end_date=calendar.end_date,
        special_weeks=config.special_weeks,
    )
    if not result.valid:
        logger.error(
            f"[DECLARATION_SERVICE] Calendar for user_id={user_id} failed verification "
            f"with {len(result.errors)} conflict(s)"
        )
        raise CalendarIntegrityError(result.errors)
    return calendar


def _preview(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    hours_store: TeachingHoursStore,
    user_id: str,
    academic_year: str,
    semester: int,
    start_date: date,
    end_date: date,
    coefficients: CoefficientTable | None,
) -> tuple[Calendar, DeclarationResult]:
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)
    ensure_period_within_limit(start_date, end_date)

    calendar = _verified_calendar(config_store, calendar_store, user_id, academic_year, semester)
    records = hours_store.list_records(user_id, academic_year, semester)
    result = aggregate_declaration(
        records,
        index_calendar(calendar.days),
        start_date,
        end_date,
        coefficients=coefficients,
    )
    return calendar, result


def preview_declaration(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    hours_store: TeachingHoursStore,
    user_id: str,
    academic_year: str,
    semester: int,
    start_date: date,
    end_date: date,
    coefficients: CoefficientTable | None = None,
) -> DeclarationResult:
    """Compute a declaration without storing anything.

    Args:
        config_store: Semester configuration store
        calendar_store: Calendar store
        hours_store: Teaching-hours store
        user_id: Declaring teacher
        academic_year: Academic year
        semester: Semester number
        start_date: Period start (inclusive)
        end_date: Period end (inclusive)
        coefficients: Coefficient table (defaults to the configured one)

    Returns:
        DeclarationResult, possibly with validation errors

    Raises:
        InvalidRangeError: If end_date < start_date
        PeriodTooLongError: If the period exceeds settings.max_period_days
        NotFoundError: If the calendar or semester configuration is missing
        CalendarIntegrityError: If the stored calendar fails verification
    """
    _, result = _preview(
        config_store,
        calendar_store,
        hours_store,
        user_id,
        academic_year,
        semester,
        start_date,
        end_date,
        coefficients,
    )
    return result


def finalize_declaration(
    config_store: SemesterConfigStore,
    calendar_store: CalendarStore,
    hours_store: TeachingHoursStore,
    declaration_store: DeclarationStore,
    user_id: str,
    academic_year: str,
    semester: int,
    start_date: date,
    end_date: date,
    title: str | None = None,
    coefficients: CoefficientTable | None = None,
) -> Declaration:
    """Compute, validate and store a declaration.

    Records that produced at least one occurrence are flagged as processed
    and can no longer be edited.

    Raises:
        NoActivityError: If the period yielded no item
        IncompleteItemError: If an item is missing required fields
        plus everything preview_declaration raises
    """
    calendar, result = _preview(
        config_store,
        calendar_store,
        hours_store,
        user_id,
        academic_year,
        semester,
        start_date,
        end_date,
        coefficients,
    )
    result.validation.raise_for_errors(start_date, end_date)

    declaration = Declaration(
        user_id=user_id,
        academic_year=academic_year,
        semester=semester,
        start_date=start_date,
        end_date=end_date,
        title=title or declaration_title(end_date),
        items=result.items,
        summary=result.summary,
        calendar_version=calendar.version,
        record_ids=result.metadata.record_ids,
        created_at=datetime.now(timezone.utc),
    )
    declaration_store.save(declaration)

    consumed = set(result.metadata.record_ids)
    records = [
        record
        for record in hours_store.list_records(user_id, academic_year, semester)
        if record.id in consumed and not record.processed_in_declaration
    ]
    if records:
        hours_store.save_all(mark_processed(records))

    logger.info(
        f"[DECLARATION_SERVICE] Finalized '{declaration.title}' for user_id={user_id}: "
        f"{len(declaration.items)} item(s), {declaration.summary.total_hours} hours, "
        f"{len(consumed)} record(s) locked"
    )
    return declaration
