"""Local key-value persistence.

KeyValueStore is fail-soft: backend errors are logged and turned into
"absent" (reads) or a False return (writes). In-memory manager state stays
the source of truth for the session; the store is best-effort durability.
"""
import json
import logging
import sqlite3

from EduFlow.core.clock import utc_now_iso
from EduFlow.core.errors import StoreReadError, StoreWriteError
from EduFlow.core.paths import store_path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
	key TEXT PRIMARY KEY,
	value TEXT NOT NULL,
	updated_at TEXT
)
"""


class StoreKeys:
	TASKS = "tasks"
	FLASHCARDS = "flashcards"
	USER = "user"
	MOODS = "moods"
	POMODORO_STATS = "pomodoroStats"


class SqliteBackend:
	"""Key -> text rows in a single SQLite table."""

	def __init__(self, path=None):
		self.path = path or store_path()

	def connect(self):
		"""Open SQLite connection and ensure schema is applied."""
		conn = sqlite3.connect(self.path)
		conn.row_factory = sqlite3.Row
		conn.executescript(SCHEMA)
		return conn

	def read(self, key):
		try:
			conn = self.connect()
			try:
				row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
			finally:
				conn.close()
		except sqlite3.Error as e:
			raise StoreReadError(f"read {key!r}: {e}") from e
		return row["value"] if row else None

	def write(self, key, text):
		try:
			conn = self.connect()
			try:
				with conn:
					conn.execute(
						"""
						INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
						ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
						""",
						(key, text, utc_now_iso())
					)
			finally:
				conn.close()
		except sqlite3.Error as e:
			raise StoreWriteError(f"write {key!r}: {e}") from e

	def delete(self, key):
		try:
			conn = self.connect()
			try:
				with conn:
					conn.execute("DELETE FROM kv WHERE key=?", (key,))
			finally:
				conn.close()
		except sqlite3.Error as e:
			raise StoreWriteError(f"delete {key!r}: {e}") from e


class MemoryBackend:
	"""Dict-backed backend; nothing survives the process.

	With `quota` set, a write that would push the total stored characters
	past it fails the way a full browser-style store does.
	"""

	def __init__(self, data=None, quota=None):
		self.data = dict(data or {})
		self.quota = quota

	def read(self, key):
		return self.data.get(key)

	def write(self, key, text):
		if self.quota is not None:
			used = sum(len(v) for k, v in self.data.items() if k != key)
			if used + len(text) > self.quota:
				raise StoreWriteError(f"quota exceeded writing {key!r}")
		self.data[key] = text

	def delete(self, key):
		self.data.pop(key, None)


class KeyValueStore:
	"""JSON (de)serialization over a backend, scoped by a key prefix."""

	def __init__(self, backend=None, prefix="eduflow_"):
		self.backend = backend if backend is not None else SqliteBackend()
		self.prefix = prefix

	def _scoped(self, key):
		return self.prefix + key

	def get(self, key, default=None):
		"""Return the stored value, or `default` when missing or unreadable."""
		try:
			text = self.backend.read(self._scoped(key))
		except StoreReadError as e:
			logger.error("Error reading from storage: %s", e)
			return default
		if text is None:
			return default
		try:
			return json.loads(text)
		except (TypeError, ValueError) as e:
			logger.error("Discarding corrupt value for %r: %s", key, e)
			return default

	def set(self, key, value):
		"""Serialize and write `value`; returns False (and logs) instead of raising."""
		try:
			text = json.dumps(value, ensure_ascii=False)
		except (TypeError, ValueError) as e:
			logger.error("Cannot serialize value for %r: %s", key, e)
			return False
		try:
			self.backend.write(self._scoped(key), text)
		except StoreWriteError as e:
			logger.error("Error writing to storage: %s", e)
			return False
		return True

	def remove(self, key):
		try:
			self.backend.delete(self._scoped(key))
		except StoreWriteError as e:
			logger.error("Error removing %r from storage: %s", key, e)
			return False
		return True
