"""Week-at-a-glance view over the task collection (read-only)."""
from dataclasses import dataclass
from datetime import date, timedelta

from EduFlow.core.clock import local_now, start_of_week


@dataclass(frozen=True)
class CalendarDay:
	date: date
	is_today: bool
	has_pending: bool


class CalendarService:
	def __init__(self, task_manager, clock=None):
		self.task_manager = task_manager
		self.clock = clock or local_now
		self.week_offset = 0

	def week_start(self):
		"""Sunday of the displayed week."""
		return start_of_week(self.clock()) + timedelta(weeks=self.week_offset)

	def week_days(self):
		today = self.clock().date()
		pending_dates = {t.date for t in self.task_manager.tasks if not t.completed}
		start = self.week_start()
		days = []
		for i in range(7):
			day = start + timedelta(days=i)
			days.append(CalendarDay(date=day, is_today=day == today, has_pending=day.isoformat() in pending_dates))
		return days

	def previous_week(self):
		self.week_offset -= 1
		return self.week_days()

	def next_week(self):
		self.week_offset += 1
		return self.week_days()

	def day_tasks(self, day):
		return self.task_manager.tasks_for_date(day)

	def month_label(self):
		return self.week_start().strftime("%B %Y")
