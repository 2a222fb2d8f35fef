"""Declaration output types.

Declaration items are produced only by the aggregator, never entered by a
user. Each item is one dated occurrence of a teaching activity, merged with
any other occurrence sharing its grouping key.
"""

from __future__ import annotations

import uuid
from datetime import date as date_type
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from declaration_engine.errors import IncompleteItemError, NoActivityError
from declaration_engine.activity import ActivityType, PostGrade

GroupKey = tuple[int, str, str, str, date_type | None]


class DeclarationItem(BaseModel):
    """One dated teaching occurrence for payroll.

    Attributes:
        post_number: Post number in the staffing plan
        post_grade: Post grade
        date: Date of the occurrence
        discipline_name: Discipline taught
        activity_type: Program language/level
        groups: Student group(s)
        course_hours: Course hours
        seminar_hours: Seminar hours
        lab_hours: Lab hours
        project_hours: Project hours
        coefficient: Pay coefficient for the activity type and hour kind
        total_hours: Sum of the hour fields
    """

    post_number: int
    post_grade: PostGrade
    date: date_type | None
    discipline_name: str
    activity_type: ActivityType | None
    groups: str
    course_hours: float = 0.0
    seminar_hours: float = 0.0
    lab_hours: float = 0.0
    project_hours: float = 0.0
    coefficient: float = 1.0
    total_hours: float = 0.0

    @property
    def group_key(self) -> GroupKey:
        return (self.post_number, self.discipline_name, str(self.activity_type), self.groups, self.date)


class HourBreakdown(BaseModel):
    """Item count and hours of one summary bucket."""

    count: int = 0
    hours: float = 0.0


class DeclarationSummary(BaseModel):
    """Totals over the items of a declaration.

    Attributes:
        total_course_hours: Sum of course hours
        total_seminar_hours: Sum of seminar hours
        total_lab_hours: Sum of lab hours
        total_project_hours: Sum of project hours
        total_hours: Grand total
        total_days: Number of distinct dates with activity
        item_count: Number of items
        by_activity_type: Count and hours per activity type
        by_discipline: Count and hours per discipline
    """

    total_course_hours: float = 0.0
    total_seminar_hours: float = 0.0
    total_lab_hours: float = 0.0
    total_project_hours: float = 0.0
    total_hours: float = 0.0
    total_days: int = 0
    item_count: int = 0
    by_activity_type: dict[str, HourBreakdown] = Field(default_factory=dict)
    by_discipline: dict[str, HourBreakdown] = Field(default_factory=dict)


class DeclarationPeriod(BaseModel):
    start_date: date_type
    end_date: date_type
    total_days: int


class DeclarationMetadata(BaseModel):
    """Bookkeeping about a declaration run.

    Attributes:
        total_records: Records handed to the aggregator
        active_records: Records expanded (verified or approved)
        total_calendar_days: Calendar days available for the run
        raw_items: Occurrences before grouping
        processed_items: Items after grouping
        period: Requested period
        record_ids: Records with at least one occurrence, in processing order
    """

    total_records: int
    active_records: int
    total_calendar_days: int
    raw_items: int
    processed_items: int
    period: DeclarationPeriod
    record_ids: list[str] = Field(default_factory=list)


class ItemIssue(BaseModel):
    """Fields missing or invalid on one item."""

    index: int
    fields: list[str]


class DeclarationIssue(BaseModel):
    """One validation finding on a declaration result."""

    code: Literal["no_activity", "incomplete_item"]
    message: str
    item_index: int | None = None
    fields: list[str] = Field(default_factory=list)


class DeclarationValidation(BaseModel):
    """Validation outcome; callers must refuse finalization while invalid."""

    is_valid: bool
    errors: list[DeclarationIssue] = Field(default_factory=list)

    def raise_for_errors(self, start_date: date_type | None = None, end_date: date_type | None = None) -> None:
        """Raise the typed error matching the findings.

        Raises:
            NoActivityError: If the period yielded no item
            IncompleteItemError: If items failed completeness checks
        """
        if self.is_valid:
            return
        if any(issue.code == "no_activity" for issue in self.errors):
            raise NoActivityError(start_date, end_date)
        raise IncompleteItemError(
            [
                ItemIssue(index=issue.item_index, fields=issue.fields)
                for issue in self.errors
                if issue.code == "incomplete_item" and issue.item_index is not None
            ]
        )


class DeclarationResult(BaseModel):
    """Items, summary and validation of one declaration run."""

    items: list[DeclarationItem]
    summary: DeclarationSummary
    metadata: DeclarationMetadata
    validation: DeclarationValidation


class Declaration(BaseModel):
    """A finalized declaration as handed to persistence and rendering.

    Attributes:
        id: Declaration identifier
        user_id: Declaring teacher
        academic_year: Academic year
        semester: Semester number
        start_date: Period start
        end_date: Period end
        title: Display title, e.g. "PO - October 2024"
        items: Declaration items
        summary: Totals
        calendar_version: Version of the calendar the items were built from
        record_ids: Teaching-hour records consumed
        stale: Calendar was regenerated after this declaration was built
        created_at: Finalization timestamp
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    academic_year: str
    semester: Literal[1, 2]
    start_date: date_type
    end_date: date_type
    title: str = ""
    items: list[DeclarationItem]
    summary: DeclarationSummary
    calendar_version: int
    record_ids: list[str] = Field(default_factory=list)
    stale: bool = False
    created_at: datetime | None = None

    @property
    def key(self) -> tuple[str, str, int]:
        return (self.user_id, self.academic_year, self.semester)


def declaration_title(end_date: date_type) -> str:
    """Default declaration title, named after the period's last month."""
    return f"PO - {end_date.strftime('%B')} {end_date.year}"
