"""Canonical error types for the declaration engine.

Every inconsistency detected by the engine surfaces as one of these types.
Calendar conflicts and declaration validation issues are first collected as
data (see ``calendar.verifier`` and ``declarations.validators``); the
exceptions below carry them when a caller decides to stop.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any


class DeclarationEngineError(Exception):
    """Base exception for the declaration engine."""

    pass


class InvalidRangeError(DeclarationEngineError, ValueError):
    """Raised when a date range is empty or inverted.

    Attributes:
        start_date: Range start
        end_date: Range end
    """

    def __init__(self, start_date: date, end_date: date, message: str | None = None) -> None:
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(message or f"End date {end_date} must be after start date {start_date}")


class PeriodTooLongError(InvalidRangeError):
    """Raised when a period exceeds the configured maximum number of days."""

    def __init__(self, start_date: date, end_date: date, max_days: int) -> None:
        self.max_days = max_days
        days = (end_date - start_date).days + 1
        super().__init__(
            start_date,
            end_date,
            f"Period {start_date} to {end_date} spans {days} days, limit is {max_days}",
        )


class AlreadyExistsError(DeclarationEngineError):
    """Raised when regeneration would overwrite existing data without overwrite=True."""

    pass


class NotFoundError(DeclarationEngineError):
    """Raised when a store has no entry for the requested key."""

    pass


class RecordLockedError(DeclarationEngineError):
    """Raised when editing a teaching-hour record already used by a declaration."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Teaching-hour record {record_id} was processed in a declaration and is read-only")


class NoActivityError(DeclarationEngineError):
    """Raised when a declaration period yields no matched occurrence."""

    def __init__(self, start_date: date | None = None, end_date: date | None = None) -> None:
        self.start_date = start_date
        self.end_date = end_date
        if start_date and end_date:
            super().__init__(f"No teaching activity found between {start_date} and {end_date}")
        else:
            super().__init__("No teaching activity found for the requested period")


class IncompleteItemError(DeclarationEngineError):
    """Raised when generated declaration items fail completeness checks.

    Attributes:
        issues: One entry per offending item, each with ``index`` and ``fields``
    """

    def __init__(self, issues: Sequence[Any]) -> None:
        self.issues = list(issues)
        indices = [getattr(issue, "index", None) for issue in self.issues]
        super().__init__(f"Incomplete declaration items at indices {indices}")


class CalendarIntegrityError(DeclarationEngineError):
    """Raised when a calendar fails verification and cannot be used.

    Attributes:
        conflicts: Every conflict reported by the verifier
    """

    def __init__(self, conflicts: Sequence[Any]) -> None:
        self.conflicts = list(conflicts)
        super().__init__(f"Calendar failed verification with {len(self.conflicts)} conflict(s)")


class HolidaySourceError(DeclarationEngineError):
    """Raised when the holiday provider cannot deliver a holiday list."""

    pass
