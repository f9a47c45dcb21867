"""Mood log: append-only 1-5 entries with averages, trend and suggestions."""
import logging
from types import MappingProxyType

from EduFlow.core.clock import display_date
from EduFlow.core.models import MoodEntry
from EduFlow.core.normalize import round_half_up, validate_level
from EduFlow.repos.store import StoreKeys
from EduFlow.services.base import StoreBackedManager

logger = logging.getLogger(__name__)

RECOMMENDATIONS = MappingProxyType({
	5: ("Tackle your hardest tasks", "Long study sessions", "Complex projects"),
	4: ("Finish pending tasks", "Review your subjects", "Learn something new"),
	3: ("Routine tasks", "Light reviews", "Short sessions"),
	2: ("Take frequent breaks", "Relaxing activities", "Simple tasks"),
	1: ("Rest properly", "Meditation or yoga", "Prioritize your sleep"),
})

CAPACITY_TEXT = MappingProxyType({
	5: "Excellent! You can take on complex, challenging tasks.",
	4: "Very good! A good moment to study and be productive.",
	3: "Normal. Moderate tasks are recommended.",
	2: "A bit low. Consider lighter tasks today.",
	1: "Rest. Prioritize your wellbeing and recovery.",
})


class MoodManager(StoreBackedManager):
	storage_key = StoreKeys.MOODS

	def __init__(self, store=None, clock=None, history_size=7):
		super().__init__(store, clock)
		self.history_size = history_size
		self.entries = []
		self.load()

	def load(self):
		raw = self.store.get(self.storage_key)
		self.entries = []
		if not isinstance(raw, list):
			return
		for item in raw:
			try:
				entry = MoodEntry.from_record(item)
				validate_level(entry.level)
			except (KeyError, TypeError, ValueError) as e:
				logger.warning("Skipping unreadable mood record %r: %s", item, e)
				continue
			self.entries.append(entry)

	def snapshot(self):
		return [e.to_record() for e in self.entries]

	def record(self, level):
		"""Append today's mood and return the suggestions for that level.

		Raises ValidationError unless `level` is an int from 1 to 5.
		"""
		level = validate_level(level)
		now = self.clock()
		self.entries.append(MoodEntry(display_date=display_date(now), level=level, timestamp=now.isoformat()))
		self._commit()
		return self.recommendations_for(level)

	def recent_history(self, n=None):
		n = self.history_size if n is None else n
		if n <= 0:
			return []
		return self.entries[-n:]

	def average_mood(self, days=7):
		recent = self.entries[-days:] if days > 0 else []
		if not recent:
			return 0
		return round_half_up(sum(e.level for e in recent) / len(recent), 1)

	def trend(self):
		"""Last 3 entries against the last 6."""
		if len(self.entries) < 2:
			return "neutral"
		recent = self.average_mood(3)
		previous = self.average_mood(6)
		if recent > previous:
			return "improving"
		if recent < previous:
			return "declining"
		return "stable"

	@staticmethod
	def recommendations_for(level):
		return list(RECOMMENDATIONS.get(level, ()))

	@staticmethod
	def capacity(level):
		"""(percent, guidance) for the intensity bar; 1..5 maps to 20..100%."""
		level = validate_level(level)
		return level * 20, CAPACITY_TEXT[level]
