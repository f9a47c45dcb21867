import argparse
import logging
import sys

from PySide6.QtCore import QCoreApplication

from EduFlow.core.settings import Settings
from EduFlow.repos.store import KeyValueStore, SqliteBackend
from EduFlow.services.calendar_service import CalendarService
from EduFlow.services.charts import weekly_chart_figure
from EduFlow.services.dashboard import Dashboard
from EduFlow.services.flashcard_manager import FlashcardManager
from EduFlow.services.mood_manager import MoodManager
from EduFlow.services.pomodoro_service import PomodoroService
from EduFlow.services.task_manager import TaskManager
from EduFlow.services.user_manager import UserManager


class AppContext:
    """Owns one instance of every manager, all sharing a single store."""

    def __init__(self, store=None, settings=None, tick_source=None, clock=None):
        self.settings = settings or Settings.from_env()
        self.store = store if store is not None else KeyValueStore(SqliteBackend(), prefix=self.settings.key_prefix)
        self.user = UserManager(self.store, clock)
        self.tasks = TaskManager(self.store, clock)
        self.flashcards = FlashcardManager(self.store, clock)
        self.moods = MoodManager(self.store, clock, history_size=self.settings.history_size)
        self.pomodoro = PomodoroService(self.store, tick_source, self.settings)
        self.calendar = CalendarService(self.tasks, clock)
        self.dashboard = Dashboard(self.tasks, self.pomodoro, self.moods, self.settings.weekly_target)

    def connect_render(self, callback):
        """Call `callback` after any manager reports a change."""
        for source in (self.user, self.tasks, self.flashcards, self.moods, self.pomodoro):
            source.changed.connect(callback)


def format_summary(ctx):
    s = ctx.dashboard.summary()
    lines = [
        ctx.user.greeting(),
        f"Completed today:  {s['completed_today']}",
        f"This week:        {s['week_completed']}/{s['week_target']} ({s['week_percent']:.0f}%)",
        f"Tasks:            {s['tasks_done']}/{s['tasks_total']}",
        f"Pomodoros:        {s['sessions_completed']} (streak {s['current_streak']}, best {s['best_streak']})",
        f"Focus time:       {int(s['focus_hours'])}h",
        f"Mood:             {s['average_mood']} ({s['mood_trend']})",
    ]
    for task in ctx.tasks.upcoming(ctx.settings.upcoming_limit):
        lines.append(f"  upcoming {task.date}  {task.title}")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Print the EduFlow dashboard")
    parser.add_argument("--chart", help="also save this week's completed-task chart to this image file")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    ctx = AppContext(settings=settings)
    print(format_summary(ctx))
    if args.chart:
        weekly_chart_figure(ctx.dashboard.weekly_chart()).savefig(args.chart)
    return 0

if __name__ == "__main__":
    sys.exit(main())
