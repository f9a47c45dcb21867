"""Dashboard figures, recomputed from the managers on every call.

Nothing here is cached or stored; collections are single-user sized.
"""
from collections import namedtuple
from datetime import timedelta

from EduFlow.core.clock import start_of_week

WEEKLY_TARGET = 15
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

WeeklyProgress = namedtuple("WeeklyProgress", ["completed", "target", "percent"])


class Dashboard:
	def __init__(self, tasks, pomodoro, moods=None, weekly_target=WEEKLY_TARGET):
		self.tasks = tasks
		self.pomodoro = pomodoro
		self.moods = moods
		self.weekly_target = weekly_target if weekly_target > 0 else WEEKLY_TARGET

	def completed_today(self):
		return len(self.tasks.completed_today())

	def weekly_progress(self):
		completed = len(self.tasks.completed_this_week())
		percent = min(completed / self.weekly_target * 100, 100)
		return WeeklyProgress(completed, self.weekly_target, percent)

	def current_streak(self):
		return self.pomodoro.stats.current_streak

	def best_streak(self):
		return self.pomodoro.stats.best_streak

	def sessions_completed(self):
		return self.pomodoro.stats.completed_session_count

	def total_focus_hours(self):
		return self.pomodoro.stats.total_focus_minutes / 60.0

	def focus_score(self):
		return self.pomodoro.focus_score()

	def weekly_chart(self):
		"""Completed tasks per weekday, Monday through Sunday of the current week."""
		monday = start_of_week(self.tasks.clock()) + timedelta(days=1)
		if monday > self.tasks.clock().date():
			# Sunday belongs to the week that started the previous Monday
			monday -= timedelta(weeks=1)
		counts = []
		for i in range(7):
			key = (monday + timedelta(days=i)).isoformat()
			counts.append(sum(1 for t in self.tasks.tasks if t.completed and t.date == key))
		return list(zip(WEEKDAY_LABELS, counts))

	def summary(self):
		done, total = self.tasks.counts()
		week = self.weekly_progress()
		data = {
			"completed_today": self.completed_today(),
			"tasks_done": done,
			"tasks_total": total,
			"week_completed": week.completed,
			"week_target": week.target,
			"week_percent": week.percent,
			"current_streak": self.current_streak(),
			"best_streak": self.best_streak(),
			"sessions_completed": self.sessions_completed(),
			"focus_hours": self.total_focus_hours(),
			"focus_score": self.focus_score(),
		}
		if self.moods is not None:
			data["average_mood"] = self.moods.average_mood()
			data["mood_trend"] = self.moods.trend()
		return data
