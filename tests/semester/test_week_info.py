"""Unit tests for week lookup by date."""

from datetime import date

import pytest

from declaration_engine.errors import InvalidRangeError
from declaration_engine.semester.types import SemesterConfig, SpecialWeek, WeekType
from declaration_engine.semester.week_generator import generate_semester_weeks
from declaration_engine.semester.week_info import (
    extrapolate_parity,
    find_week_by_number,
    find_week_containing,
    get_week_info,
    get_week_info_for_config,
    semester_span,
)


class TestWeekLookup:
    """Test resolving the week owning a date."""

    def test_date_inside_week(self, semester_weeks):
        info = get_week_info(semester_weeks, date(2024, 10, 10))
        assert info is not None
        assert info.week_number == "S02"
        assert info.week_type == WeekType.EVEN
        assert info.is_special is False
        assert info.start_date == date(2024, 10, 8)
        assert info.end_date == date(2024, 10, 14)

    def test_last_day_of_week_belongs_to_it(self, semester_weeks):
        assert get_week_info(semester_weeks, date(2024, 10, 7)).week_number == "S01"
        assert get_week_info(semester_weeks, date(2024, 10, 8)).week_number == "S02"

    def test_date_outside_weeks_returns_none(self, semester_weeks):
        assert get_week_info(semester_weeks, date(2024, 10, 22)) is None
        assert get_week_info(semester_weeks, date(2024, 9, 30)) is None

    def test_find_helpers(self, semester_weeks):
        assert find_week_by_number(semester_weeks, "S03").start_date == date(2024, 10, 15)
        assert find_week_by_number(semester_weeks, "S09") is None
        assert find_week_containing(semester_weeks, date(2024, 10, 21)).week_number == "S03"


class TestSpecialWeekOverride:
    """Test ad-hoc special weeks overlaying the regular sequence."""

    def test_typed_special_week_overrides_parity(self, semester_weeks):
        """Test a special week with a parity wins over the regular week."""
        clinical = SpecialWeek(
            name="Clinical week",
            start_date=date(2024, 10, 8),
            end_date=date(2024, 10, 14),
            week_type=WeekType.ODD,
        )
        info = get_week_info(semester_weeks, date(2024, 10, 9), [clinical])
        assert info.week_type == WeekType.ODD
        assert info.week_number == "S02"
        assert info.is_special is True

    def test_special_week_number_is_used_when_given(self, semester_weeks):
        special = SpecialWeek(
            name="Make-up week",
            start_date=date(2024, 10, 22),
            week_number="S15",
            week_type="Even",
        )
        info = get_week_info(semester_weeks, date(2024, 10, 24), [special])
        assert info.week_number == "S15"
        assert info.week_type == WeekType.EVEN
        assert info.end_date == date(2024, 10, 28)

    def test_vacation_does_not_override(self, semester_weeks):
        """Test a special week without parity leaves the regular week in place."""
        vacation = SpecialWeek(name="Vacation", start_date=date(2024, 10, 8), week_type="")
        assert vacation.is_vacation
        info = get_week_info(semester_weeks, date(2024, 10, 9), [vacation])
        assert info.week_number == "S02"
        assert info.week_type == WeekType.EVEN

    def test_inverted_special_week_rejected(self):
        with pytest.raises(ValueError):
            SpecialWeek(start_date=date(2024, 10, 8), end_date=date(2024, 10, 1))


class TestParityExtrapolation:
    """Test parity projection for dates outside the week sequence."""

    def test_week_after_last_flips(self, semester_weeks):
        assert extrapolate_parity(semester_weeks, date(2024, 10, 22)) == WeekType.EVEN
        assert extrapolate_parity(semester_weeks, date(2024, 10, 29)) == WeekType.ODD

    def test_week_before_first_flips(self, semester_weeks):
        assert extrapolate_parity(semester_weeks, date(2024, 9, 30)) == WeekType.EVEN
        assert extrapolate_parity(semester_weeks, date(2024, 9, 24)) == WeekType.EVEN
        assert extrapolate_parity(semester_weeks, date(2024, 9, 23)) == WeekType.ODD

    def test_no_weeks(self):
        assert extrapolate_parity([], date(2024, 10, 1)) is None


class TestConfigLookup:
    """Test lookups bound to a semester configuration."""

    def test_date_inside_semester(self, semester_config):
        info = get_week_info_for_config(semester_config, date(2024, 10, 15))
        assert info.week_number == "S03"
        assert info.week_type == WeekType.ODD

    def test_date_outside_semester_raises(self, semester_config):
        with pytest.raises(InvalidRangeError):
            get_week_info_for_config(semester_config, date(2024, 10, 22))
        with pytest.raises(InvalidRangeError):
            get_week_info_for_config(semester_config, date(2024, 9, 30))

    def test_span_covers_extended_weeks(self):
        """Test the semester range stretches to the last extended week."""
        start, end = date(2024, 10, 1), date(2024, 10, 21)
        config = SemesterConfig(
            faculty="Medicine",
            academic_year="2024/2025",
            semester=1,
            start_date=start,
            end_date=end,
            is_extended_program=True,
            weeks=generate_semester_weeks(start, end, is_extended_program=True, extended_weeks=2),
        )
        assert semester_span(config) == (date(2024, 10, 1), date(2024, 11, 4))
        assert get_week_info_for_config(config, date(2024, 11, 1)).week_number == "S05"

    def test_config_rejects_inverted_dates(self):
        with pytest.raises(ValueError):
            SemesterConfig(
                faculty="Medicine",
                academic_year="2024/2025",
                semester=1,
                start_date=date(2024, 10, 21),
                end_date=date(2024, 10, 1),
            )
