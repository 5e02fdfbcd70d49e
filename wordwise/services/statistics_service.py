"""Point-in-time rollups over a learner's vocabulary."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from wordwise.core.clock import Clock, SystemClock, as_utc, local_day
from wordwise.crud import vocabulary_crud
from wordwise.models.vocabulary.vocabulary_item_model import (
    DifficultyLevel,
    ReviewStatus,
    VocabularyItem,
)

logger = logging.getLogger(__name__)

DUE_STATUSES = {ReviewStatus.LEARNING, ReviewStatus.REVIEW}


class StatisticsService:
    """Read-only aggregates, recomputed from the store on every call."""

    def __init__(self, db: Session, owner_id: int, clock: Clock | None = None):
        self.db = db
        self.owner_id = owner_id
        self.clock = clock or SystemClock()

    def compute_statistics(self) -> dict:
        items = vocabulary_crud.list_by_owner(self.db, self.owner_id)
        now = as_utc(self.clock.now())

        total_correct = sum(item.correct_count or 0 for item in items)
        total_incorrect = sum(item.incorrect_count or 0 for item in items)
        attempts = total_correct + total_incorrect
        accuracy_rate = round(total_correct / attempts * 100, 2) if attempts else 0.0

        statistics = {
            "total_words": len(items),
            "words_by_difficulty": self._count_by_difficulty(items),
            "words_by_review_status": count_by_status(items),
            "words_by_tag": self._count_by_tag(items),
            "learning_streak": self._learning_streak(items, local_day(now)),
            "words_due_for_review": sum(
                1
                for item in items
                if item.review_status in DUE_STATUSES
                and item.next_review_at is not None
                and as_utc(item.next_review_at) <= now
            ),
            "total_reviews": sum(item.review_count or 0 for item in items),
            "accuracy_rate": accuracy_rate,
        }
        logger.debug("Statistiques de vocabulaire pour %s: %s", self.owner_id, statistics)
        return statistics

    @staticmethod
    def _count_by_difficulty(items: Iterable[VocabularyItem]) -> Dict[str, int]:
        counts = {level.value: 0 for level in DifficultyLevel}
        for item in items:
            if item.difficulty_level is not None:
                counts[item.difficulty_level.value] += 1
        return counts

    @staticmethod
    def _count_by_tag(items: Iterable[VocabularyItem]) -> List[dict]:
        counts: Dict[str, int] = {}
        for item in items:
            for tag in item.tag_themes or []:
                counts[tag] = counts.get(tag, 0) + 1
        # sorted() is stable: equal counts keep first-seen order.
        return [
            {"tag": tag, "count": count}
            for tag, count in sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
        ]

    @staticmethod
    def _learning_streak(items: Iterable[VocabularyItem], today: date) -> int:
        """Consecutive days, ending today, with at least one reviewed item."""
        reviewed_days = {
            local_day(item.last_reviewed_at) for item in items if item.last_reviewed_at
        }
        streak = 0
        current_day = today
        while current_day in reviewed_days:
            streak += 1
            current_day -= timedelta(days=1)
        return streak


def count_by_status(items: Iterable[VocabularyItem]) -> Dict[str, int]:
    counts = {status.value: 0 for status in ReviewStatus}
    for item in items:
        status = item.review_status or ReviewStatus.NEW
        counts[status.value] += 1
    return counts


__all__ = ["StatisticsService", "count_by_status"]
