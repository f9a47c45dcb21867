"""Exception types shared by the EduFlow core."""


class EduFlowError(Exception):
	"""Base class for every error raised by the core."""


class ValidationError(EduFlowError, ValueError):
	"""Required input is missing or out of range.

	Raised synchronously by add/record operations; the caller is expected
	to surface `fields` to the user and let them correct the input.
	"""

	def __init__(self, message, fields=()):
		super().__init__(message)
		self.fields = tuple(fields)


class StoreError(EduFlowError):
	"""Backend-level storage failure. Never escapes KeyValueStore."""


class StoreReadError(StoreError):
	pass


class StoreWriteError(StoreError):
	pass
