"""Task collection: add / toggle / delete plus date-bucketed queries.

Stored order is insertion order; every filter or sort happens at read time
on a copy.
"""
import logging

from EduFlow.core.clock import epoch_millis, start_of_week
from EduFlow.core.models import Task
from EduFlow.core.normalize import (
	normalize_date, normalize_filter, normalize_minutes, normalize_priority,
	parse_date, require_fields, DEFAULT_FILTER,
)
from EduFlow.repos.store import StoreKeys
from EduFlow.services.base import StoreBackedManager

logger = logging.getLogger(__name__)


class TaskManager(StoreBackedManager):
	storage_key = StoreKeys.TASKS

	def __init__(self, store=None, clock=None):
		super().__init__(store, clock)
		self.tasks = []
		self.current_filter = DEFAULT_FILTER
		self.load()

	# -------------------- persistence --------------------
	def load(self):
		raw = self.store.get(self.storage_key)
		self.tasks = []
		if not isinstance(raw, list):
			return
		seen = set()
		for item in raw:
			try:
				task = Task.from_record(item)
			except (KeyError, TypeError, ValueError) as e:
				logger.warning("Skipping unreadable task record %r: %s", item, e)
				continue
			if task.id in seen:
				logger.warning("Skipping duplicate task id %s", task.id)
				continue
			seen.add(task.id)
			self.tasks.append(task)

	def snapshot(self):
		return [t.to_record() for t in self.tasks]

	# -------------------- mutations --------------------
	def _next_id(self):
		nid = epoch_millis(self.clock())
		if self.tasks:
			nid = max(nid, max(t.id for t in self.tasks) + 1)
		return nid

	def add(self, data):
		"""Validate `data` and append a new Task.

		`title` and `date` are required; `description`, `estimatedMinutes`
		(alias `estimated_minutes`) and `priority` fall back to their defaults.
		"""
		require_fields(data, ("title", "date"), "Title and date are required")
		minutes = data.get("estimatedMinutes", data.get("estimated_minutes"))
		task = Task(
			id=self._next_id(),
			title=str(data["title"]).strip(),
			date=normalize_date(data["date"]),
			description=str(data.get("description") or ""),
			estimated_minutes=normalize_minutes(minutes, whole=True),
			priority=normalize_priority(data.get("priority")),
			completed=False,
			created_at=self.clock().isoformat(),
		)
		self.tasks.append(task)
		self._commit()
		return task

	def get(self, task_id):
		for task in self.tasks:
			if task.id == task_id:
				return task
		return None

	def toggle_completion(self, task_id):
		"""Flip `completed`; returns the task, or None (no-op) when the id is unknown."""
		task = self.get(task_id)
		if task is None:
			return None
		task.completed = not task.completed
		self._commit()
		return task

	def delete(self, task_id):
		"""Remove the task; returns False when nothing matched."""
		remaining = [t for t in self.tasks if t.id != task_id]
		if len(remaining) == len(self.tasks):
			return False
		self.tasks = remaining
		self._commit()
		return True

	# -------------------- queries --------------------
	def set_filter(self, criterion):
		self.current_filter = normalize_filter(criterion)
		self.changed.emit()
		return self.filter()

	def filter(self, criterion=None):
		criterion = self.current_filter if criterion is None else normalize_filter(criterion)
		if criterion == "pending":
			return [t for t in self.tasks if not t.completed]
		if criterion == "completed":
			return [t for t in self.tasks if t.completed]
		if criterion == "high":
			return [t for t in self.tasks if t.priority == "high"]
		return list(self.tasks)

	def tasks_for_date(self, day):
		wanted = parse_date(day)
		if wanted is None:
			return []
		key = wanted.isoformat()
		return [t for t in self.tasks if t.date == key]

	def pending_by_date(self):
		"""Incomplete tasks, earliest date first (timer task picker)."""
		return sorted((t for t in self.tasks if not t.completed), key=lambda t: t.date)

	def upcoming(self, limit=5):
		today = self.clock().date().isoformat()
		future = [t for t in self.tasks if not t.completed and t.date >= today]
		future.sort(key=lambda t: t.date)
		return future[:max(limit, 0)]

	def completed_today(self):
		return [t for t in self.tasks if t.completed and t.date == self.clock().date().isoformat()]

	def completed_this_week(self):
		"""Completed tasks dated from the last Sunday through today."""
		now = self.clock()
		start = start_of_week(now).isoformat()
		today = now.date().isoformat()
		return [t for t in self.tasks if t.completed and start <= t.date <= today]

	def counts(self):
		done = sum(1 for t in self.tasks if t.completed)
		return done, len(self.tasks)
