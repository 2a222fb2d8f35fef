"""Semester module - week sequence generation and week lookup.

This module provides:
- Semester, regular and special week types
- Odd/Even week sequence generation with extended-program weeks
- Week resolution for a date, with parity extrapolation outside the sequence
"""

from declaration_engine.semester.types import (
    SemesterConfig,
    SemesterWeek,
    SpecialWeek,
    WeekType,
    format_week_number,
)
from declaration_engine.semester.week_generator import generate_semester_weeks, parity_for_index
from declaration_engine.semester.week_info import (
    WeekInfo,
    extrapolate_parity,
    find_week_by_number,
    find_week_containing,
    get_week_info,
    get_week_info_for_config,
    semester_span,
)

__all__ = [
    "SemesterConfig",
    "SemesterWeek",
    "SpecialWeek",
    "WeekInfo",
    "WeekType",
    "extrapolate_parity",
    "find_week_by_number",
    "find_week_containing",
    "format_week_number",
    "generate_semester_weeks",
    "get_week_info",
    "get_week_info_for_config",
    "parity_for_index",
    "semester_span",
]
