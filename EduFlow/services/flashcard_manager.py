"""Flashcards with a wrap-around study cursor."""
import logging

from EduFlow.core.clock import epoch_millis
from EduFlow.core.models import Flashcard, SubjectSummary
from EduFlow.core.normalize import require_fields
from EduFlow.repos.store import StoreKeys
from EduFlow.services.base import StoreBackedManager

logger = logging.getLogger(__name__)


class FlashcardManager(StoreBackedManager):
	storage_key = StoreKeys.FLASHCARDS

	def __init__(self, store=None, clock=None):
		super().__init__(store, clock)
		self.flashcards = []
		self.current_index = 0
		self.load()

	def load(self):
		raw = self.store.get(self.storage_key)
		self.flashcards = []
		self.current_index = 0
		if not isinstance(raw, list):
			return
		for item in raw:
			try:
				self.flashcards.append(Flashcard.from_record(item))
			except (KeyError, TypeError, ValueError) as e:
				logger.warning("Skipping unreadable flashcard record %r: %s", item, e)

	def snapshot(self):
		return [c.to_record() for c in self.flashcards]

	def add(self, data):
		require_fields(data, ("subject", "question", "answer"), "Subject, question and answer are required")
		nid = epoch_millis(self.clock())
		if self.flashcards:
			nid = max(nid, max(c.id for c in self.flashcards) + 1)
		card = Flashcard(
			id=nid,
			subject=str(data["subject"]).strip(),
			question=str(data["question"]).strip(),
			answer=str(data["answer"]).strip(),
		)
		self.flashcards.append(card)
		self._commit()
		return card

	# -------------------- study cursor --------------------
	def current_card(self):
		if not self.flashcards:
			return None
		return self.flashcards[self.current_index]

	def progress(self):
		"""'3/10' style position label; empty when there are no cards."""
		if not self.flashcards:
			return ""
		return f"{self.current_index + 1}/{len(self.flashcards)}"

	def next(self):
		if not self.flashcards:
			return None
		self.current_index = (self.current_index + 1) % len(self.flashcards)
		self.changed.emit()
		return self.current_card()

	def previous(self):
		if not self.flashcards:
			return None
		self.current_index = (self.current_index - 1) % len(self.flashcards)
		self.changed.emit()
		return self.current_card()

	def mark_reviewed(self, index=None):
		"""Count a review of the card at `index` (default: cursor) and advance past it."""
		if not self.flashcards:
			return None
		if index is not None:
			self.current_index = index % len(self.flashcards)
		card = self.flashcards[self.current_index]
		card.review_count += 1
		card.last_reviewed_at = self.clock().isoformat()
		self.current_index = (self.current_index + 1) % len(self.flashcards)
		self._commit()
		return card

	# -------------------- subjects --------------------
	def group_by_subject(self):
		summary = SubjectSummary()
		for card in self.flashcards:
			if card.subject not in summary.counts:
				summary.subjects.append(card.subject)
				summary.counts[card.subject] = 0
			summary.counts[card.subject] += 1
		return summary

	def cards_for_subject(self, subject):
		return [c for c in self.flashcards if c.subject == subject]

	def study_subject(self, subject):
		"""Move the cursor to the subject's first card; False if the subject has none."""
		for idx, card in enumerate(self.flashcards):
			if card.subject == subject:
				self.current_index = idx
				self.changed.emit()
				return True
		return False
