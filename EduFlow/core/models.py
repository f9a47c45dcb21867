"""Entity records.

Records are stored with camelCase keys; `from_record` also accepts the
field names written by the first version of the app (desc, time, reviews,
mood, pomodoroCount, ...).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from EduFlow.core.normalize import normalize_minutes, normalize_priority


def _non_negative_int(value) -> int:
	if isinstance(value, bool):
		return 0
	try:
		number = int(value)
	except (TypeError, ValueError):
		return 0
	return max(number, 0)


@dataclass
class Task:
	id: int
	title: str
	date: str
	description: str = ""
	estimated_minutes: int = 25
	priority: str = "medium"
	completed: bool = False
	created_at: Optional[str] = None

	def to_record(self) -> dict[str, Any]:
		return {
			"id": self.id,
			"title": self.title,
			"description": self.description,
			"date": self.date,
			"estimatedMinutes": self.estimated_minutes,
			"priority": self.priority,
			"completed": self.completed,
			"createdAt": self.created_at,
		}

	@classmethod
	def from_record(cls, raw: dict[str, Any]) -> "Task":
		return cls(
			id=int(raw["id"]),
			title=str(raw["title"]),
			date=str(raw["date"]),
			description=str(raw.get("description", raw.get("desc")) or ""),
			estimated_minutes=normalize_minutes(raw.get("estimatedMinutes", raw.get("time")), whole=True),
			priority=normalize_priority(raw.get("priority")),
			completed=bool(raw.get("completed", False)),
			created_at=raw.get("createdAt"),
		)


@dataclass
class Flashcard:
	id: int
	subject: str
	question: str
	answer: str
	review_count: int = 0
	last_reviewed_at: Optional[str] = None

	def to_record(self) -> dict[str, Any]:
		return {
			"id": self.id,
			"subject": self.subject,
			"question": self.question,
			"answer": self.answer,
			"reviewCount": self.review_count,
			"lastReviewedAt": self.last_reviewed_at,
		}

	@classmethod
	def from_record(cls, raw: dict[str, Any]) -> "Flashcard":
		return cls(
			id=int(raw["id"]),
			subject=str(raw["subject"]),
			question=str(raw["question"]),
			answer=str(raw["answer"]),
			review_count=_non_negative_int(raw.get("reviewCount", raw.get("reviews"))),
			last_reviewed_at=raw.get("lastReviewedAt", raw.get("lastReviewed")),
		)


@dataclass
class MoodEntry:
	display_date: str
	level: int
	timestamp: str

	def to_record(self) -> dict[str, Any]:
		return {"displayDate": self.display_date, "level": self.level, "timestamp": self.timestamp}

	@classmethod
	def from_record(cls, raw: dict[str, Any]) -> "MoodEntry":
		return cls(
			display_date=str(raw.get("displayDate", raw.get("date")) or ""),
			level=int(raw.get("level", raw.get("mood"))),
			timestamp=str(raw.get("timestamp") or ""),
		)


@dataclass
class SessionStats:
	completed_session_count: int = 0
	total_focus_minutes: int = 0
	best_streak: int = 0
	current_streak: int = 0

	def to_record(self) -> dict[str, Any]:
		return {
			"completedSessionCount": self.completed_session_count,
			"totalFocusMinutes": self.total_focus_minutes,
			"bestStreak": self.best_streak,
			"currentStreak": self.current_streak,
		}

	@classmethod
	def from_record(cls, raw: Optional[dict[str, Any]]) -> "SessionStats":
		"""Merge a persisted (possibly partial or older) record over the zero defaults."""
		stats = cls()
		if not isinstance(raw, dict):
			return stats
		stats.completed_session_count = _non_negative_int(raw.get("completedSessionCount", raw.get("pomodoroCount")))
		stats.total_focus_minutes = _non_negative_int(raw.get("totalFocusMinutes", raw.get("totalFocusTime")))
		stats.current_streak = _non_negative_int(raw.get("currentStreak"))
		stats.best_streak = max(_non_negative_int(raw.get("bestStreak")), stats.current_streak)
		return stats


@dataclass
class UserProfile:
	username: str = "student"
	display_name: str = "Student"
	avatar: str = "\U0001F468\u200d\U0001F393"

	def to_record(self) -> dict[str, Any]:
		return {"username": self.username, "displayName": self.display_name, "avatar": self.avatar}

	@classmethod
	def from_record(cls, raw: dict[str, Any]) -> "UserProfile":
		default = cls()
		return cls(
			username=str(raw["username"]),
			display_name=str(raw.get("displayName") or raw["username"]),
			avatar=str(raw.get("avatar") or default.avatar),
		)

	def initials(self) -> str:
		return (self.display_name or self.username or "U")[:2].upper()


@dataclass
class SubjectSummary:
	"""Cards per subject plus the subjects in first-seen order."""
	counts: dict[str, int] = field(default_factory=dict)
	subjects: list[str] = field(default_factory=list)
