import os
from pathlib import Path

APP_NAME = "EduFlow"

def user_data_dir(app_name=APP_NAME):
	"""Return per-user data dir (Windows/macOS/Linux).

	EDUFLOW_DATA_DIR wins over the platform default.
	"""
	override = os.environ.get("EDUFLOW_DATA_DIR")
	if override:
		path = Path(override)
	else:
		if os.name == "nt":
			base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
		elif os.name == "posix":
			base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
		else:
			base = os.path.expanduser("~")
		path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def store_path():
	"""Return Path to eduflow.db inside user data dir."""
	return user_data_dir() / "eduflow.db"
