from datetime import date, datetime, timedelta, timezone

def local_now():
	"""Return the current local time as a naive datetime."""
	return datetime.now()

def utc_now_iso(now=None):
	"""Return UTC time as ISO8601 string (no microseconds)."""
	now = now or datetime.now(timezone.utc)
	if now.tzinfo is None:
		now = now.astimezone()
	return now.astimezone(timezone.utc).replace(microsecond=0).isoformat()

def display_date(now=None):
	"""Locale-style day/month/year label used for mood entries."""
	now = now or datetime.now()
	return f"{now.day}/{now.month}/{now.year}"

def start_of_week(now=None) -> date:
	"""Most recent Sunday (the week start) on or before `now`."""
	today = (now or datetime.now()).date()
	# isoweekday: Monday=1 .. Sunday=7
	return today - timedelta(days=today.isoweekday() % 7)

def epoch_millis(now=None) -> int:
	now = now or datetime.now()
	return int(now.timestamp() * 1000)

def fmt_mmss(seconds: int) -> str:
	"""Format seconds as MM:SS."""
	m = seconds // 60
	s = seconds % 60
	return f"{m:02}:{s:02}"
