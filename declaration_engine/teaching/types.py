"""Teaching-hour record types.

A TeachingHourRecord is a recurring weekly commitment: on a given weekday
(optionally only in Odd or Even weeks, or only in one special week) a
teacher delivers a number of hours of exactly one kind for one discipline
and group.

The hour kind is an explicit tag with a single count. Upstream data using
four parallel fields (course/seminar/lab/project hours) is accepted on
input and must carry exactly one non-zero count.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from declaration_engine.activity import ActivityType, HourKind, PostGrade
from declaration_engine.calendar.types import DayOfWeek
from declaration_engine.semester.types import WEEK_NUMBER_PATTERN, OptionalWeekType

HOUR_FIELDS: dict[str, HourKind] = {kind.field_name: kind for kind in HourKind}

RecordStatus = Literal["editing", "verified", "approved", "archived"]

# Statuses whose records feed declarations
DECLARABLE_STATUSES = frozenset({"verified", "approved"})


class TeachingHourRecord(BaseModel):
    """Recurring weekly teaching commitment.

    Attributes:
        id: Record identifier
        user_id: Teacher owning the record
        faculty: Faculty name
        department: Department name
        academic_year: Academic year, "YYYY/YYYY"
        semester: Semester number (1 or 2)
        post_number: Post number in the staffing plan (>= 1)
        post_grade: Post grade (Prof, Conf, Lect, Asist, Drd)
        discipline_name: Discipline taught
        group: Student group(s) taught
        day_of_week: Weekday of the commitment
        odd_even: Week parity, None for every week
        is_special: Commitment happens only in special_week
        special_week: Week number of a special commitment (S15, ...)
        activity_type: Program language/level
        hour_kind: Kind of hours delivered
        hours: Hours delivered per occurrence
        status: Record lifecycle status
        processed_in_declaration: Consumed by a finalized declaration (read-only)
        created_at: Creation timestamp
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str = ""
    faculty: str = ""
    department: str = ""
    academic_year: str = Field(default="", pattern=r"^(\d{4}/\d{4})?$")
    semester: Literal[1, 2] = 1
    post_number: int = Field(ge=1)
    post_grade: PostGrade
    discipline_name: str = Field(min_length=1)
    group: str = Field(min_length=1)
    day_of_week: DayOfWeek
    odd_even: OptionalWeekType = None
    is_special: bool = False
    special_week: str | None = Field(default=None, pattern=WEEK_NUMBER_PATTERN)
    activity_type: ActivityType
    hour_kind: HourKind
    hours: float = Field(gt=0)
    status: RecordStatus = "editing"
    processed_in_declaration: bool = False
    created_at: datetime | None = None

    model_config = {"str_strip_whitespace": True}

    @model_validator(mode="before")
    @classmethod
    def _from_hour_fields(cls, data: Any) -> Any:
        """Accept the four parallel hour fields and require exactly one non-zero."""
        if not isinstance(data, dict):
            return data
        present = [name for name in HOUR_FIELDS if name in data]
        if not present:
            return data
        if "hour_kind" in data or "hours" in data:
            raise ValueError("Use either hour_kind/hours or the per-kind hour fields, not both")

        data = dict(data)
        non_zero = []
        for name in HOUR_FIELDS:
            raw = data.pop(name, 0) or 0
            try:
                value = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"{name} must be a number, got: {raw!r}") from None
            if value < 0:
                raise ValueError(f"{name} must be >= 0")
            if value > 0:
                non_zero.append((name, value))
        if len(non_zero) != 1:
            raise ValueError("Exactly one of course, seminar, lab or project hours must be non-zero")

        name, value = non_zero[0]
        data["hour_kind"] = HOUR_FIELDS[name]
        data["hours"] = value
        return data

    @model_validator(mode="after")
    def _check_special_week(self) -> TeachingHourRecord:
        if self.is_special and not self.special_week:
            raise ValueError("special_week is required when is_special is True")
        return self

    def hours_of(self, kind: HourKind) -> float:
        return self.hours if self.hour_kind == kind else 0.0

    @property
    def course_hours(self) -> float:
        return self.hours_of(HourKind.COURSE)

    @property
    def seminar_hours(self) -> float:
        return self.hours_of(HourKind.SEMINAR)

    @property
    def lab_hours(self) -> float:
        return self.hours_of(HourKind.LAB)

    @property
    def project_hours(self) -> float:
        return self.hours_of(HourKind.PROJECT)

    @property
    def is_active(self) -> bool:
        return self.status in DECLARABLE_STATUSES

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.user_id, self.academic_year, self.semester)
