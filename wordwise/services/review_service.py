"""Review state tracking after each practice attempt."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from wordwise.core.clock import Clock, SystemClock
from wordwise.core.config import settings
from wordwise.crud import vocabulary_crud
from wordwise.crud.vocabulary_crud import ConcurrentModificationError
from wordwise.models.vocabulary.vocabulary_item_model import VocabularyItem
from wordwise.services.exceptions import ConcurrentUpdateError, VocabularyNotFound
from wordwise.services.scheduling import (
    calculate_next_interval_days,
    compute_accuracy,
    resolve_review_status,
)

logger = logging.getLogger(__name__)


class ReviewService:
    """Applies practice results to a learner's vocabulary items."""

    def __init__(
        self,
        db: Session,
        owner_id: int,
        clock: Clock | None = None,
        max_retries: int | None = None,
    ):
        self.db = db
        self.owner_id = owner_id
        self.clock = clock or SystemClock()
        self.max_retries = max(
            1, max_retries if max_retries is not None else settings.RECORD_ATTEMPT_MAX_RETRIES
        )

    def record_attempt(self, item_id: int, is_correct: bool) -> VocabularyItem:
        """Record one answer and reschedule the item.

        The counters, status, and both timestamps are committed together. If
        another writer updated the item after we read it, the transaction is
        rolled back and the whole update is replayed on a fresh read.
        """
        for attempt in range(1, self.max_retries + 1):
            item = vocabulary_crud.get_by_id(self.db, self.owner_id, item_id)
            if item is None:
                raise VocabularyNotFound()

            self._apply_attempt(item, is_correct)
            try:
                vocabulary_crud.save(self.db, item)
                self.db.commit()
            except ConcurrentModificationError:
                self.db.rollback()
                logger.warning(
                    "Mise à jour concurrente du mot %s (tentative %s/%s)",
                    item_id,
                    attempt,
                    self.max_retries,
                )
                continue
            except Exception:
                self.db.rollback()
                raise

            logger.info(
                "Mot %s révisé par %s: %s, statut=%s, prochaine révision=%s",
                item.id,
                self.owner_id,
                "correct" if is_correct else "incorrect",
                item.review_status.value,
                item.next_review_at,
            )
            return item

        raise ConcurrentUpdateError()

    def _apply_attempt(self, item: VocabularyItem, is_correct: bool) -> None:
        item.review_count = (item.review_count or 0) + 1
        if is_correct:
            item.correct_count = (item.correct_count or 0) + 1
        else:
            item.incorrect_count = (item.incorrect_count or 0) + 1

        accuracy = compute_accuracy(item.correct_count, item.incorrect_count)
        item.review_status = resolve_review_status(
            item.review_status, item.review_count, accuracy, is_correct
        )

        now = self.clock.now()
        item.last_reviewed_at = now
        interval = calculate_next_interval_days(item.review_count, accuracy)
        item.next_review_at = now + timedelta(days=interval)


__all__ = ["ReviewService"]
