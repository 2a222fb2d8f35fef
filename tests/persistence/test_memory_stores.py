"""Tests for the in-memory stores."""

from declaration_engine.persistence.memory import (
    InMemoryCalendarStore,
    InMemorySemesterConfigStore,
    InMemoryTeachingHoursStore,
)


class TestSnapshots:
    """Test loads and saves work on copies."""

    def test_config_round_trip_is_a_copy(self, semester_config):
        store = InMemorySemesterConfigStore()
        store.save(semester_config)

        loaded = store.load("Medicine", "2024/2025", 1)
        loaded.weeks.clear()

        assert len(store.load("Medicine", "2024/2025", 1).weeks) == 3
        assert store.load("Medicine", "2024/2025", 2) is None

    def test_calendar_missing_key(self):
        assert InMemoryCalendarStore().load("teacher-1", "2024/2025", 1) is None

    def test_calendar_saved_by_key(self, calendar_store):
        calendar = calendar_store.load("teacher-1", "2024/2025", 1)
        calendar.version = 7
        calendar_store.save(calendar)
        assert calendar_store.load("teacher-1", "2024/2025", 1).version == 7


class TestTeachingHoursStore:
    """Test record listing and upserts."""

    def test_list_filters_by_key(self, make_record):
        mine = make_record()
        other_user = make_record(user_id="teacher-2")
        other_semester = make_record(semester=2)
        store = InMemoryTeachingHoursStore([mine, other_user, other_semester])

        assert [r.id for r in store.list_records("teacher-1", "2024/2025", 1)] == [mine.id]

    def test_save_all_upserts_by_id(self, make_record):
        record = make_record()
        store = InMemoryTeachingHoursStore([record])
        store.save_all([record.model_copy(update={"hours": 5})])

        [stored] = store.list_records("teacher-1", "2024/2025", 1)
        assert stored.hours == 5
