import pytest

from EduFlow.core.errors import ValidationError
from EduFlow.repos.store import KeyValueStore, MemoryBackend, StoreKeys
from EduFlow.services.task_manager import TaskManager


class TestAdd:
    def test_add_builds_full_record_with_defaults(self, task_manager, clock):
        task = task_manager.add({"title": "Read chapter 3", "date": "2025-10-24"})

        assert task.title == "Read chapter 3"
        assert task.date == "2025-10-24"
        assert task.description == ""
        assert task.estimated_minutes == 25
        assert task.priority == "medium"
        assert task.completed is False
        assert task.created_at == clock.now.isoformat()
        assert task_manager.tasks == [task]

    @pytest.mark.parametrize("data", [
        {"date": "2025-10-24"},
        {"title": "", "date": "2025-10-24"},
        {"title": "   ", "date": "2025-10-24"},
        {"title": "Essay"},
        {"title": "Essay", "date": None},
        {},
    ])
    def test_add_requires_title_and_date(self, task_manager, data):
        with pytest.raises(ValidationError):
            task_manager.add(data)
        assert task_manager.tasks == []

    def test_add_rejects_malformed_date(self, task_manager):
        with pytest.raises(ValidationError) as exc:
            task_manager.add({"title": "Essay", "date": "next tuesday"})
        assert exc.value.fields == ("date",)

    @pytest.mark.parametrize("minutes, expected", [("40", 40), (15, 15), ("abc", 25), (-5, 25), (0, 25), (None, 25)])
    def test_estimated_minutes_coercion(self, task_manager, minutes, expected):
        task = task_manager.add({"title": "T", "date": "2025-10-24", "estimatedMinutes": minutes})
        assert task.estimated_minutes == expected

    @pytest.mark.parametrize("priority, expected", [("high", "high"), ("LOW", "low"), ("alta", "high"), ("urgent", "medium"), (None, "medium")])
    def test_priority_normalization(self, task_manager, priority, expected):
        task = task_manager.add({"title": "T", "date": "2025-10-24", "priority": priority})
        assert task.priority == expected

    def test_ids_unique_under_fixed_clock(self, add_task):
        ids = [add_task(title=f"t{i}").id for i in range(5)]
        assert len(set(ids)) == 5
        assert ids == sorted(ids)

    def test_add_persists_and_notifies(self, task_manager, store, recorder):
        task_manager.changed.connect(recorder.record)
        task = task_manager.add({"title": "Essay", "date": "2025-10-24"})
        assert store.get(StoreKeys.TASKS) == [task.to_record()]
        assert len(recorder.calls) == 1


class TestMutations:
    def test_add_toggle_delete_roundtrip(self, task_manager, add_task):
        add_task(title="keep")
        before = len(task_manager.tasks)

        task = add_task(title="temporary")
        task_manager.toggle_completion(task.id)
        assert task_manager.get(task.id).completed is True
        assert task_manager.delete(task.id) is True

        assert len(task_manager.tasks) == before
        assert task_manager.get(task.id) is None
        assert [t.title for t in task_manager.tasks] == ["keep"]

    def test_toggle_twice_restores(self, task_manager, add_task):
        task = add_task()
        task_manager.toggle_completion(task.id)
        task_manager.toggle_completion(task.id)
        assert task.completed is False

    def test_unknown_id_is_noop(self, task_manager, add_task, recorder):
        add_task()
        task_manager.changed.connect(recorder.record)
        assert task_manager.toggle_completion(12345) is None
        assert task_manager.delete(12345) is False
        assert len(task_manager.tasks) == 1
        assert recorder.calls == []


class TestQueries:
    def test_filters_partition_collection(self, task_manager, add_task):
        for i in range(6):
            task = add_task(title=f"t{i}", priority="high" if i % 2 else "low")
            if i % 3 == 0:
                task_manager.toggle_completion(task.id)

        everything = task_manager.filter("all")
        pending = task_manager.filter("pending")
        completed = task_manager.filter("completed")
        assert {t.id for t in pending} | {t.id for t in completed} == {t.id for t in everything}
        assert not {t.id for t in pending} & {t.id for t in completed}
        assert all(t.priority == "high" for t in task_manager.filter("high"))
        assert len(task_manager.filter("high")) == 3

    def test_current_filter_defaults_to_all_and_does_not_reorder(self, task_manager, add_task):
        a = add_task(title="a", date="2025-10-30")
        b = add_task(title="b", date="2025-10-20")
        assert task_manager.current_filter == "all"
        task_manager.toggle_completion(b.id)
        assert task_manager.set_filter("pending") == [a]
        assert task_manager.filter() == [a]
        assert task_manager.set_filter("bogus") == [a, b]
        assert task_manager.tasks == [a, b]

    def test_tasks_for_date(self, task_manager, add_task):
        add_task(title="a", date="2025-10-22")
        add_task(title="b", date="2025-10-23")
        from datetime import date
        assert [t.title for t in task_manager.tasks_for_date("2025-10-22")] == ["a"]
        assert [t.title for t in task_manager.tasks_for_date(date(2025, 10, 23))] == ["b"]
        assert task_manager.tasks_for_date("garbage") == []

    def test_upcoming_sorted_incomplete_and_capped(self, task_manager, add_task):
        add_task(title="past", date="2025-10-01")
        add_task(title="far", date="2025-12-01")
        add_task(title="soon", date="2025-10-23")
        add_task(title="today", date="2025-10-22")
        done = add_task(title="done", date="2025-10-24")
        task_manager.toggle_completion(done.id)

        assert [t.title for t in task_manager.upcoming(5)] == ["today", "soon", "far"]
        assert [t.title for t in task_manager.upcoming(2)] == ["today", "soon"]
        assert task_manager.upcoming(0) == []

    def test_completed_today_and_this_week(self, task_manager, add_task):
        sunday = add_task(title="sunday", date="2025-10-19")
        today = add_task(title="today", date="2025-10-22")
        saturday_before = add_task(title="last week", date="2025-10-18")
        tomorrow = add_task(title="tomorrow", date="2025-10-23")
        add_task(title="pending", date="2025-10-22")
        for task in (sunday, today, saturday_before, tomorrow):
            task_manager.toggle_completion(task.id)

        assert [t.title for t in task_manager.completed_today()] == ["today"]
        assert [t.title for t in task_manager.completed_this_week()] == ["sunday", "today"]

    def test_pending_by_date(self, task_manager, add_task):
        add_task(title="late", date="2025-11-01")
        add_task(title="early", date="2025-10-20")
        assert [t.title for t in task_manager.pending_by_date()] == ["early", "late"]


class TestPersistence:
    def test_reload_yields_equal_collection(self, store, clock, task_manager, add_task):
        add_task(title="a", description="details", priority="high", estimatedMinutes=50)
        task_manager.toggle_completion(add_task(title="b").id)

        reloaded = TaskManager(store, clock)
        assert reloaded.tasks == task_manager.tasks

    def test_legacy_records_migrate(self, clock):
        legacy = '[{"id": 1, "title": "Tarea", "desc": "vieja", "date": "2025-10-22", "time": "30", "priority": "alta", "completed": true, "createdAt": "2025-10-01T00:00:00Z"}, {"title": "no id"}]'
        store = KeyValueStore(MemoryBackend({"eduflow_tasks": legacy}))
        manager = TaskManager(store, clock)

        assert len(manager.tasks) == 1
        task = manager.tasks[0]
        assert (task.description, task.estimated_minutes, task.priority, task.completed) == ("vieja", 30, "high", True)

    def test_string_ids_are_coerced_and_bad_ids_skipped(self, clock):
        raw = '[{"id": "7", "title": "kept", "date": "2025-10-22"}, {"id": "x", "title": "dropped", "date": "2025-10-22"}]'
        store = KeyValueStore(MemoryBackend({"eduflow_tasks": raw}))
        manager = TaskManager(store, clock)

        assert [(t.id, t.title) for t in manager.tasks] == [(7, "kept")]
        added = manager.add({"title": "new", "date": "2025-10-23"})
        assert added.id > 7

    def test_failed_write_keeps_memory_state(self, clock):
        store = KeyValueStore(MemoryBackend(quota=10))
        manager = TaskManager(store, clock)
        task = manager.add({"title": "Essay", "date": "2025-10-24"})
        assert manager.tasks == [task]
        assert store.get(StoreKeys.TASKS) is None
