"""Unit tests for declaration aggregation.

Tests cover:
- Reference scenario (2024/2025 semester 1 from 2024-10-01)
- Grouping by (post, discipline, activity type, groups, date)
- Deterministic, stable ordering
- Summary and metadata
- Validation findings
"""

from datetime import date

import pytest

from declaration_engine.calendar.types import DayOfWeek
from declaration_engine.config.settings import settings
from declaration_engine.declarations.aggregator import aggregate_declaration, group_items
from declaration_engine.declarations.coefficients import CoefficientTable
from declaration_engine.declarations.types import DeclarationItem
from declaration_engine.errors import InvalidRangeError, NoActivityError
from declaration_engine.teaching.types import ActivityType, HourKind

START = date(2024, 10, 1)
END = date(2024, 10, 21)


class TestReferenceScenario:
    """Test the reference semester end to end."""

    def test_odd_tuesday_course(self, make_record, calendar_index):
        """Test 2 items on 2024-10-01 and 2024-10-15, 2024-10-08 excluded (Even week)."""
        record = make_record()
        result = aggregate_declaration([record], calendar_index, START, END)

        assert [item.date for item in result.items] == [date(2024, 10, 1), date(2024, 10, 15)]
        for item in result.items:
            assert item.course_hours == 2
            assert item.seminar_hours == 0
            assert item.total_hours == 2
            assert item.coefficient == 1.0
            assert item.discipline_name == "Anatomy"
            assert item.groups == "MG1"
            assert item.activity_type == ActivityType.LR

        assert result.summary.total_course_hours == 4
        assert result.summary.total_hours == 4
        assert result.summary.total_days == 2
        assert result.summary.item_count == 2
        assert result.validation.is_valid is True
        assert result.metadata.record_ids == [record.id]
        assert result.metadata.raw_items == 2
        assert result.metadata.total_calendar_days == 21
        assert result.metadata.period.total_days == 21

    def test_aggregation_is_idempotent(self, make_record, calendar_index):
        records = [make_record(), make_record(odd_even=None, hour_kind=HourKind.LAB, hours=1, group="MG2")]
        first = aggregate_declaration(records, calendar_index, START, END)
        second = aggregate_declaration(records, calendar_index, START, END)
        assert first == second

    def test_inverted_period_raises(self, make_record, calendar_index):
        with pytest.raises(InvalidRangeError):
            aggregate_declaration([make_record()], calendar_index, END, START)


class TestGrouping:
    """Test merging of items sharing a grouping key."""

    def test_course_and_seminar_merge_on_same_date(self, make_record, calendar_index):
        records = [make_record(), make_record(hour_kind=HourKind.SEMINAR, hours=1)]
        result = aggregate_declaration(records, calendar_index, START, END)

        assert len(result.items) == 2
        first = result.items[0]
        assert first.date == date(2024, 10, 1)
        assert first.course_hours == 2
        assert first.seminar_hours == 1
        assert first.total_hours == 3
        assert result.metadata.raw_items == 4
        assert result.metadata.processed_items == 2

    def test_total_hours_are_conserved(self, make_record, calendar_index):
        records = [
            make_record(),
            make_record(hour_kind=HourKind.SEMINAR, hours=1),
            make_record(odd_even=None, hour_kind=HourKind.LAB, hours=3),
        ]
        result = aggregate_declaration(records, calendar_index, START, END)

        raw_total = 2 * 2 + 1 * 2 + 3 * 3
        assert sum(item.total_hours for item in result.items) == raw_total
        assert result.summary.total_hours == raw_total

    def test_different_groups_are_not_merged(self, make_record, calendar_index):
        records = [make_record(), make_record(group="MG2")]
        result = aggregate_declaration(records, calendar_index, START, END)
        assert len(result.items) == 4
        assert result.summary.total_days == 2

    def test_first_coefficient_is_kept(self):
        items = [
            DeclarationItem(
                post_number=1,
                post_grade="Lect",
                date=date(2024, 10, 1),
                discipline_name="Anatomy",
                activity_type=ActivityType.LE,
                groups="MG1",
                course_hours=2,
                coefficient=1.2,
                total_hours=2,
            ),
            DeclarationItem(
                post_number=1,
                post_grade="Lect",
                date=date(2024, 10, 1),
                discipline_name="Anatomy",
                activity_type=ActivityType.LE,
                groups="MG1",
                lab_hours=1,
                coefficient=1.5,
                total_hours=1,
            ),
        ]
        [merged] = group_items(items)
        assert merged.coefficient == 1.2
        assert merged.course_hours == 2
        assert merged.lab_hours == 1
        assert merged.total_hours == 3

    def test_ties_keep_record_order(self, make_record, calendar_index):
        records = [make_record(discipline_name="Physiology"), make_record(discipline_name="Anatomy")]
        result = aggregate_declaration(records, calendar_index, START, END)
        assert [(i.date, i.discipline_name) for i in result.items] == [
            (date(2024, 10, 1), "Physiology"),
            (date(2024, 10, 1), "Anatomy"),
            (date(2024, 10, 15), "Physiology"),
            (date(2024, 10, 15), "Anatomy"),
        ]

    def test_items_sorted_by_date_across_records(self, make_record, calendar_index):
        records = [make_record(day_of_week=DayOfWeek.FRIDAY, odd_even=None), make_record()]
        result = aggregate_declaration(records, calendar_index, START, END)
        dates = [item.date for item in result.items]
        assert dates == sorted(dates)


class TestRecordSelection:
    """Test which records contribute."""

    def test_archived_records_are_skipped(self, make_record, calendar_index):
        records = [make_record(), make_record(group="MG2", status="archived")]
        result = aggregate_declaration(records, calendar_index, START, END)

        assert result.metadata.total_records == 2
        assert result.metadata.active_records == 1
        assert {item.groups for item in result.items} == {"MG1"}

    def test_unverified_records_are_skipped(self, make_record, calendar_index):
        result = aggregate_declaration([make_record(status="editing")], calendar_index, START, END)

        assert result.items == []
        assert result.metadata.active_records == 0
        assert result.validation.is_valid is False

    def test_approved_records_count(self, make_record, calendar_index):
        result = aggregate_declaration([make_record(status="approved")], calendar_index, START, END)
        assert len(result.items) == 2

    def test_processed_records_still_count(self, make_record, calendar_index):
        record = make_record(processed_in_declaration=True)
        result = aggregate_declaration([record], calendar_index, START, END)
        assert len(result.items) == 2

    def test_record_without_occurrence_not_listed(self, make_record, calendar_index):
        matching = make_record()
        saturday = make_record(day_of_week=DayOfWeek.SATURDAY, odd_even=None)
        result = aggregate_declaration([matching, saturday], calendar_index, START, END)
        assert result.metadata.record_ids == [matching.id]


class TestCoefficients:
    """Test coefficient assignment."""

    def test_program_coefficient(self, make_record, calendar_index):
        result = aggregate_declaration([make_record(activity_type="ME")], calendar_index, START, END)
        assert {item.coefficient for item in result.items} == {1.3}

    def test_explicit_table(self, make_record, calendar_index):
        table = CoefficientTable.default().with_override(ActivityType.LR, HourKind.COURSE, 2.0)
        result = aggregate_declaration([make_record()], calendar_index, START, END, coefficients=table)
        assert {item.coefficient for item in result.items} == {2.0}

    def test_settings_overrides(self, make_record, calendar_index, monkeypatch):
        monkeypatch.setattr(settings, "coefficient_overrides", {"LR:course": 1.5})
        result = aggregate_declaration([make_record()], calendar_index, START, END)
        assert {item.coefficient for item in result.items} == {1.5}


class TestSummaryAndValidation:
    """Test summary breakdowns and validation findings."""

    def test_breakdowns(self, make_record, calendar_index):
        records = [make_record(), make_record(discipline_name="Histology", activity_type="LE", odd_even=None)]
        summary = aggregate_declaration(records, calendar_index, START, END).summary

        assert summary.by_activity_type["LR"].count == 2
        assert summary.by_activity_type["LR"].hours == 4
        assert summary.by_activity_type["LE"].count == 3
        assert summary.by_discipline["Histology"].hours == 6
        assert summary.total_days == 3

    def test_empty_period_reports_no_activity(self, make_record, calendar_index):
        result = aggregate_declaration([make_record()], calendar_index, date(2024, 10, 2), date(2024, 10, 7))

        assert result.items == []
        assert result.validation.is_valid is False
        assert [issue.code for issue in result.validation.errors] == ["no_activity"]
        with pytest.raises(NoActivityError):
            result.validation.raise_for_errors(date(2024, 10, 2), date(2024, 10, 7))

    def test_no_records(self, calendar_index):
        result = aggregate_declaration([], calendar_index, START, END)
        assert result.validation.is_valid is False
        assert result.summary.total_hours == 0
