"""Once-per-second tick drivers for the Pomodoro timer.

A tick source has `start(callback)`, `stop()` and an `active` flag. After
`stop()` returns no further callbacks fire.
"""
from PySide6.QtCore import QTimer


class QtTickSource:
	"""Real-time ticks from a QTimer; needs a running Qt event loop."""

	def __init__(self, interval_ms=1000):
		self._timer = QTimer()
		self._timer.setInterval(interval_ms)
		self._callback = None
		self._timer.timeout.connect(self._on_timeout)

	@property
	def active(self):
		return self._timer.isActive()

	def start(self, callback):
		self._callback = callback
		self._timer.start()

	def stop(self):
		self._timer.stop()
		self._callback = None

	def _on_timeout(self):
		if self._callback is not None:
			self._callback()


class ManualTickSource:
	"""Virtual clock: ticks only fire when advance() is called."""

	def __init__(self):
		self._callback = None
		self.ticks = 0

	@property
	def active(self):
		return self._callback is not None

	def start(self, callback):
		self._callback = callback

	def stop(self):
		self._callback = None

	def advance(self, seconds=1):
		"""Fire up to `seconds` ticks; stops early if the consumer stops the source."""
		fired = 0
		for _ in range(seconds):
			if self._callback is None:
				break
			self._callback()
			self.ticks += 1
			fired += 1
		return fired
