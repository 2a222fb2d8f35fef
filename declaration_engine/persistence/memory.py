"""In-memory store implementations.

Every load returns a deep copy and every save stores one, so callers work
on snapshots exactly as they would against a database.
"""

from loguru import logger

from declaration_engine.calendar.types import Calendar
from declaration_engine.declarations.types import Declaration
from declaration_engine.semester.types import SemesterConfig
from declaration_engine.teaching.types import TeachingHourRecord

Key = tuple[str, str, int]


class InMemorySemesterConfigStore:
    def __init__(self) -> None:
        self._configs: dict[Key, SemesterConfig] = {}

    def load(self, faculty: str, academic_year: str, semester: int) -> SemesterConfig | None:
        config = self._configs.get((faculty, academic_year, semester))
        return config.model_copy(deep=True) if config else None

    def save(self, config: SemesterConfig) -> None:
        self._configs[config.key] = config.model_copy(deep=True)
        logger.debug(f"[STORE] Saved semester config {config.key} v{config.version}")


class InMemoryCalendarStore:
    def __init__(self) -> None:
        self._calendars: dict[Key, Calendar] = {}

    def load(self, user_id: str, academic_year: str, semester: int) -> Calendar | None:
        calendar = self._calendars.get((user_id, academic_year, semester))
        return calendar.model_copy(deep=True) if calendar else None

    def save(self, calendar: Calendar) -> None:
        self._calendars[calendar.key] = calendar.model_copy(deep=True)
        logger.debug(f"[STORE] Saved calendar {calendar.key} v{calendar.version} ({len(calendar.days)} days)")


class InMemoryTeachingHoursStore:
    """Records keyed by id; save_all upserts."""

    def __init__(self, records: list[TeachingHourRecord] | None = None) -> None:
        self._records: dict[str, TeachingHourRecord] = {}
        if records:
            self.save_all(records)

    def list_records(self, user_id: str, academic_year: str, semester: int) -> list[TeachingHourRecord]:
        return [
            record.model_copy(deep=True)
            for record in self._records.values()
            if record.key == (user_id, academic_year, semester)
        ]

    def save_all(self, records: list[TeachingHourRecord]) -> None:
        for record in records:
            self._records[record.id] = record.model_copy(deep=True)


class InMemoryDeclarationStore:
    """Declarations keyed by id; save upserts."""

    def __init__(self) -> None:
        self._declarations: dict[str, Declaration] = {}

    def list_declarations(self, user_id: str, academic_year: str, semester: int) -> list[Declaration]:
        return [
            declaration.model_copy(deep=True)
            for declaration in self._declarations.values()
            if declaration.key == (user_id, academic_year, semester)
        ]

    def save(self, declaration: Declaration) -> None:
        self._declarations[declaration.id] = declaration.model_copy(deep=True)
