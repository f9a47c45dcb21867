"""Pomodoro timer: work / short-break / long-break countdown and session stats.

The countdown is driven by an injected tick source (one tick per second).
Only completed work periods touch SessionStats; the next mode is chosen on
expiry but not started automatically.
"""
import logging

from PySide6.QtCore import QObject, Signal

from EduFlow.core.clock import fmt_mmss
from EduFlow.core.models import SessionStats
from EduFlow.core.normalize import normalize_minutes, normalize_mode, round_half_up
from EduFlow.core.settings import Settings
from EduFlow.repos.store import KeyValueStore, StoreKeys
from EduFlow.services.tick_source import QtTickSource

logger = logging.getLogger(__name__)


class PomodoroService(QObject):
	tick = Signal(int)  # emits remaining seconds
	state_changed = Signal(str)  # emits 'running', 'paused', 'idle'
	mode_changed = Signal(str)
	session_completed = Signal(str)  # emits the mode that just finished
	changed = Signal()

	def __init__(self, store=None, tick_source=None, settings=None):
		super().__init__()
		self.store = store if store is not None else KeyValueStore()
		self.settings = settings or Settings()
		self._ticks = tick_source if tick_source is not None else QtTickSource()
		self.defaults = {mode: minutes * 60 for mode, minutes in self.settings.mode_minutes().items()}
		self.durations = dict(self.defaults)
		self.mode = "work"
		self.remaining_seconds = self.durations["work"]
		self.running = False
		self.stats = SessionStats()
		self.load()

	# -------------------- persistence --------------------
	def load(self):
		self.stats = SessionStats.from_record(self.store.get(StoreKeys.POMODORO_STATS))

	def save(self):
		return self.store.set(StoreKeys.POMODORO_STATS, self.stats.to_record())

	# -------------------- transitions --------------------
	def _seconds_for(self, mode, minutes):
		if minutes is None:
			return self.durations[mode]
		default_minutes = self.defaults[mode] / 60
		seconds = int(round(normalize_minutes(minutes, default=default_minutes) * 60))
		return seconds if seconds > 0 else self.defaults[mode]

	def set_mode(self, mode, minutes=None):
		"""Switch mode and reload its countdown; cancels a running countdown, keeps stats.

		`minutes` may be fractional; missing keeps the mode's configured
		duration, malformed or non-positive falls back to the default.
		"""
		mode = normalize_mode(mode, default=self.mode)
		self._stop_ticks()
		was_running = self.running
		self.running = False
		self.mode = mode
		self.durations[mode] = self._seconds_for(mode, minutes)
		self.remaining_seconds = self.durations[mode]
		if was_running:
			self.state_changed.emit('idle')
		self.mode_changed.emit(mode)
		self.tick.emit(self.remaining_seconds)
		self.changed.emit()

	def start(self):
		if self.running:
			return
		if self.remaining_seconds <= 0:
			self.remaining_seconds = self.durations[self.mode]
		self.running = True
		self._ticks.start(self._on_tick)
		self.state_changed.emit('running')

	def pause(self):
		self._stop_ticks()
		if not self.running:
			return
		self.running = False
		self.state_changed.emit('paused')

	def reset(self):
		"""Pause and reload the current mode's duration. Stats are untouched."""
		self.pause()
		self.remaining_seconds = self.durations[self.mode]
		self.state_changed.emit('idle')
		self.tick.emit(self.remaining_seconds)
		self.changed.emit()

	def skip(self):
		"""Abandon the current period without counting it and move to the next mode."""
		if self.mode == "work":
			self.set_mode("short-break")
		else:
			self.set_mode("work")

	def _stop_ticks(self):
		if self._ticks.active:
			self._ticks.stop()

	def _on_tick(self):
		if not self.running:
			return
		self.remaining_seconds = max(self.remaining_seconds - 1, 0)
		self.tick.emit(self.remaining_seconds)
		if self.remaining_seconds == 0:
			self._on_expiry()

	def _on_expiry(self):
		finished = self.mode
		self.pause()
		if finished == "work":
			stats = self.stats
			stats.completed_session_count += 1
			stats.total_focus_minutes += round_half_up(self.durations["work"] / 60)
			stats.current_streak += 1
			stats.best_streak = max(stats.best_streak, stats.current_streak)
			self.save()
			logger.info("Work session %d complete", stats.completed_session_count)
			if stats.completed_session_count % self.settings.long_break_every == 0:
				next_mode = "long-break"
			else:
				next_mode = "short-break"
		else:
			next_mode = "work"
		self.session_completed.emit(finished)
		self.set_mode(next_mode)

	# -------------------- display --------------------
	def display(self):
		return fmt_mmss(self.remaining_seconds)

	def progress(self):
		"""Fraction of the current period still remaining (1.0 = untouched)."""
		total = self.durations[self.mode]
		return self.remaining_seconds / total if total else 0.0

	def focus_score(self):
		if self.stats.completed_session_count <= 0:
			return 0
		return round(self.stats.current_streak / self.stats.completed_session_count * 100)
