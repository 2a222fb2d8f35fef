"""Activity vocabulary shared by records, coefficients and settings."""

from enum import StrEnum


class ActivityType(StrEnum):
    """Program language/level of an activity."""

    LR = "LR"  # Bachelor, Romanian
    LE = "LE"  # Bachelor, English
    MR = "MR"  # Master, Romanian
    ME = "ME"  # Master, English


class PostGrade(StrEnum):
    """Grade of a post in the staffing plan."""

    PROF = "Prof"
    CONF = "Conf"
    LECT = "Lect"
    ASIST = "Asist"
    DRD = "Drd"


class HourKind(StrEnum):
    """Kind of teaching hour."""

    COURSE = "course"
    SEMINAR = "seminar"
    LAB = "lab"
    PROJECT = "project"

    @property
    def field_name(self) -> str:
        return f"{self.value}_hours"
