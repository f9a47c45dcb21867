from EduFlow.core.models import UserProfile
from EduFlow.repos.store import StoreKeys
from EduFlow.services.base import StoreBackedManager

_FIELD_KEYS = {"username": "username", "display_name": "displayName", "avatar": "avatar"}


class UserManager(StoreBackedManager):
	"""Single local profile. No authentication: a stored profile simply wins over the default."""

	storage_key = StoreKeys.USER

	def __init__(self, store=None, clock=None):
		super().__init__(store, clock)
		self.user = UserProfile()
		self.load()

	def load(self):
		stored = self.store.get(self.storage_key)
		if isinstance(stored, dict) and stored.get("username"):
			self.user = UserProfile.from_record(stored)
		else:
			self.user = UserProfile()
		return self.user

	def snapshot(self):
		return self.user.to_record()

	def update(self, **changes):
		unknown = set(changes) - set(_FIELD_KEYS)
		if unknown:
			raise TypeError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
		record = self.user.to_record()
		for name, value in changes.items():
			if value is not None:
				record[_FIELD_KEYS[name]] = str(value)
		if not record["username"]:
			record["username"] = self.user.username
		self.user = UserProfile.from_record(record)
		self._commit()
		return self.user

	def greeting(self):
		return f"Hello, {self.user.display_name}"
