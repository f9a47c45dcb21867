"""Input normalization.

Each function maps loose UI input onto the canonical value, falling back to
the documented default. Validation (which raises) and defaulting (which
never does) are kept apart; entity construction only sees clean values.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType

from EduFlow.core.errors import ValidationError

PRIORITIES = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"
# legacy records were stored with Spanish priority names
PRIORITY_ALIASES = MappingProxyType({
	"high": "high",
	"medium": "medium",
	"low": "low",
	"alta": "high",
	"media": "medium",
	"baja": "low",
})

DEFAULT_TASK_MINUTES = 25

MODES = ("work", "short-break", "long-break")
MODE_ALIASES = MappingProxyType({
	"work": "work",
	"focus": "work",
	"short-break": "short-break",
	"short": "short-break",
	"long-break": "long-break",
	"long": "long-break",
})

FILTERS = ("all", "pending", "completed", "high")
DEFAULT_FILTER = "all"
FILTER_ALIASES = MappingProxyType({
	"all": "all",
	"todas": "all",
	"pending": "pending",
	"pendientes": "pending",
	"completed": "completed",
	"completadas": "completed",
	"high": "high",
	"alta": "high",
})

MOOD_LEVELS = range(1, 6)


def normalize_priority(value) -> str:
	"""Unknown or missing priority -> 'medium'."""
	if not isinstance(value, str):
		return DEFAULT_PRIORITY
	return PRIORITY_ALIASES.get(value.strip().lower(), DEFAULT_PRIORITY)


def normalize_minutes(value, default=DEFAULT_TASK_MINUTES, whole=False):
	"""Positive number of minutes, or `default` for anything else.

	Accepts ints, floats and numeric strings ("25", "0.5"); whole values come
	back as int. With `whole`, fractions are truncated first ("40.7" -> 40,
	"0.5" -> default).
	"""
	if isinstance(value, bool) or value is None:
		return default
	try:
		number = float(value)
	except (TypeError, ValueError):
		return default
	if not math.isfinite(number):
		return default
	if whole:
		number = float(int(number))
	if number <= 0:
		return default
	return int(number) if number.is_integer() else number


def round_half_up(value, places=0):
	"""Round halves away from zero (3.25 -> 3.3), unlike the built-in round()."""
	quantum = Decimal(1).scaleb(-places)
	rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
	return int(rounded) if places == 0 else float(rounded)


def normalize_mode(value, default="work") -> str:
	if not isinstance(value, str):
		return default
	return MODE_ALIASES.get(value.strip().lower(), default)


def normalize_filter(value) -> str:
	if not isinstance(value, str):
		return DEFAULT_FILTER
	return FILTER_ALIASES.get(value.strip().lower(), DEFAULT_FILTER)


def parse_date(value):
	"""Return a date for a date/datetime/ISO string, or None when it can't be read."""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	if isinstance(value, str):
		try:
			return date.fromisoformat(value.strip()[:10])
		except ValueError:
			return None
	return None


def normalize_date(value) -> str:
	"""ISO YYYY-MM-DD string for `value`; raises ValidationError if unreadable."""
	parsed = parse_date(value)
	if parsed is None:
		raise ValidationError(f"Invalid date: {value!r}", fields=("date",))
	return parsed.isoformat()


def _blank(value) -> bool:
	return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, names, message=None):
	"""Raise ValidationError listing every name whose value is missing or blank."""
	data = data or {}
	missing = [name for name in names if _blank(data.get(name))]
	if missing:
		raise ValidationError(message or f"Missing required fields: {', '.join(missing)}", fields=missing)


def validate_level(level) -> int:
	"""Mood level must be an int in 1..5."""
	if isinstance(level, bool) or not isinstance(level, int) or level not in MOOD_LEVELS:
		raise ValidationError(f"Mood level must be an integer from 1 to 5, got {level!r}", fields=("level",))
	return level
