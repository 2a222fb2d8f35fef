"""Store contracts for the engine's external collaborators.

The engine only needs load-all/save-all semantics keyed by
(faculty, academic_year, semester) for semester configuration and
(user_id, academic_year, semester) for everything owned by a teacher.
Concurrent writers to the same key must be serialized by the store.
"""

from typing import Protocol

from declaration_engine.calendar.types import Calendar
from declaration_engine.declarations.types import Declaration
from declaration_engine.semester.types import SemesterConfig
from declaration_engine.teaching.types import TeachingHourRecord


class SemesterConfigStore(Protocol):
    def load(self, faculty: str, academic_year: str, semester: int) -> SemesterConfig | None: ...

    def save(self, config: SemesterConfig) -> None: ...


class CalendarStore(Protocol):
    def load(self, user_id: str, academic_year: str, semester: int) -> Calendar | None: ...

    def save(self, calendar: Calendar) -> None: ...


class TeachingHoursStore(Protocol):
    def list_records(self, user_id: str, academic_year: str, semester: int) -> list[TeachingHourRecord]: ...

    def save_all(self, records: list[TeachingHourRecord]) -> None: ...


class DeclarationStore(Protocol):
    def list_declarations(self, user_id: str, academic_year: str, semester: int) -> list[Declaration]: ...

    def save(self, declaration: Declaration) -> None: ...
