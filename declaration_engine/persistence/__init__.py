"""Persistence contracts and in-memory stores."""

from declaration_engine.persistence.memory import (
    InMemoryCalendarStore,
    InMemoryDeclarationStore,
    InMemorySemesterConfigStore,
    InMemoryTeachingHoursStore,
)
from declaration_engine.persistence.stores import (
    CalendarStore,
    DeclarationStore,
    SemesterConfigStore,
    TeachingHoursStore,
)

__all__ = [
    "CalendarStore",
    "DeclarationStore",
    "InMemoryCalendarStore",
    "InMemoryDeclarationStore",
    "InMemorySemesterConfigStore",
    "InMemoryTeachingHoursStore",
    "SemesterConfigStore",
    "TeachingHoursStore",
]
