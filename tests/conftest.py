"""
Shared fixtures: a controllable clock, an in-memory store, a manual tick
source and freshly constructed managers for every test.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from PySide6.QtCore import QCoreApplication

from EduFlow.core.settings import Settings
from EduFlow.repos.store import KeyValueStore, MemoryBackend
from EduFlow.services.flashcard_manager import FlashcardManager
from EduFlow.services.mood_manager import MoodManager
from EduFlow.services.pomodoro_service import PomodoroService
from EduFlow.services.task_manager import TaskManager
from EduFlow.services.tick_source import ManualTickSource

# Wednesday; the week started on Sunday 2025-10-19
WEDNESDAY = datetime(2025, 10, 22, 10, 30)


class FakeClock:
    """Callable returning a settable 'now'."""

    def __init__(self, now: datetime = WEDNESDAY):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend) -> KeyValueStore:
    return KeyValueStore(backend)


@pytest.fixture
def ticks() -> ManualTickSource:
    return ManualTickSource()


@pytest.fixture
def task_manager(store, clock) -> TaskManager:
    return TaskManager(store, clock)


@pytest.fixture
def flashcard_manager(store, clock) -> FlashcardManager:
    return FlashcardManager(store, clock)


@pytest.fixture
def mood_manager(store, clock) -> MoodManager:
    return MoodManager(store, clock)


@pytest.fixture
def pomodoro(store, ticks) -> PomodoroService:
    return PomodoroService(store, ticks, Settings())


@pytest.fixture
def recorder():
    """Collects signal emissions: connect `recorder.record`, inspect `recorder.calls`."""

    class Recorder:
        def __init__(self):
            self.calls = []

        def record(self, *args):
            self.calls.append(args)

    return Recorder()


@pytest.fixture
def add_task(task_manager):
    """Factory: add a valid task, overriding any field."""

    def _add(title: str = "Read chapter 3", date: str = "2025-10-22", **extra):
        data = {"title": title, "date": date}
        data.update(extra)
        return task_manager.add(data)

    return _add
