from PySide6.QtCore import QObject, Signal

from EduFlow.core.clock import local_now
from EduFlow.repos.store import KeyValueStore


class StoreBackedManager(QObject):
	"""Owns one stored value; re-persists it whole and emits `changed` after each mutation."""

	changed = Signal()

	storage_key = None

	def __init__(self, store=None, clock=None):
		super().__init__()
		self.store = store if store is not None else KeyValueStore()
		self.clock = clock or local_now

	def load(self):
		raise NotImplementedError

	def snapshot(self):
		"""JSON-ready value written under `storage_key`."""
		raise NotImplementedError

	def save(self):
		return self.store.set(self.storage_key, self.snapshot())

	def _commit(self):
		self.save()
		self.changed.emit()
