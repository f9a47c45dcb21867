"""Runtime configuration.

Every value has a default; EDUFLOW_* environment variables override them.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

ENV_PREFIX = "EDUFLOW_"


@dataclass(frozen=True)
class Settings:
	work_minutes: int = 25
	short_break_minutes: int = 5
	long_break_minutes: int = 15
	long_break_every: int = 4
	weekly_target: int = 15
	upcoming_limit: int = 5
	history_size: int = 7
	key_prefix: str = "eduflow_"
	log_level: str = "WARNING"

	@classmethod
	def from_env(cls, environ=None) -> "Settings":
		"""Build settings from EDUFLOW_<FIELD> variables, e.g. EDUFLOW_WEEKLY_TARGET=20."""
		environ = os.environ if environ is None else environ
		values = {}
		for f in fields(cls):
			raw = environ.get(ENV_PREFIX + f.name.upper())
			if raw is None or raw.strip() == "":
				continue
			if f.type == "int":
				try:
					number = int(raw)
				except ValueError:
					logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, f.name.upper(), raw)
					continue
				if number <= 0:
					logger.warning("Ignoring %s%s=%r: must be positive", ENV_PREFIX, f.name.upper(), raw)
					continue
				values[f.name] = number
			else:
				values[f.name] = raw.strip()
		return cls(**values)

	def mode_minutes(self) -> dict[str, int]:
		return {
			"work": self.work_minutes,
			"short-break": self.short_break_minutes,
			"long-break": self.long_break_minutes,
		}
