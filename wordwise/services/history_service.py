"""Day-by-day progress history rebuilt from the current vocabulary snapshot.

There is no practice ledger, so the projection is approximate: each item's
current status is reported for every day since its creation, and an item
counts as practiced only on the day of its most recent review.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import List

from sqlalchemy.orm import Session

from wordwise.core.clock import Clock, SystemClock, as_utc, end_of_day, local_day, scheduler_zone
from wordwise.core.config import settings
from wordwise.crud import vocabulary_crud
from wordwise.services.exceptions import InvalidPracticeInput
from wordwise.services.scheduling import compute_accuracy
from wordwise.services.statistics_service import count_by_status

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, db: Session, owner_id: int, clock: Clock | None = None):
        self.db = db
        self.owner_id = owner_id
        self.clock = clock or SystemClock()

    def project_history(self, days: int | None = None) -> dict:
        """Return one data point per day from ``today - days`` to today inclusive."""
        if days is None:
            days = settings.HISTORY_DEFAULT_DAYS
        if days < 1 or days > settings.HISTORY_MAX_DAYS:
            raise InvalidPracticeInput("invalid_days")

        zone = scheduler_zone()
        items = vocabulary_crud.list_by_owner(self.db, self.owner_id)
        today = local_day(self.clock.now(), zone)
        start = today - timedelta(days=days)

        data_points: List[dict] = []
        current_day = start
        while current_day <= today:
            cutoff = end_of_day(current_day, zone)
            known = [item for item in items if as_utc(item.created_at) <= cutoff]
            practiced = [
                item
                for item in items
                if item.last_reviewed_at is not None
                and local_day(item.last_reviewed_at, zone) == current_day
            ]

            accuracies = [
                compute_accuracy(item.correct_count, item.incorrect_count)
                for item in practiced
                if (item.correct_count or 0) + (item.incorrect_count or 0) > 0
            ]
            average = sum(accuracies) / len(accuracies) if accuracies else 0.0

            data_points.append(
                {
                    "date": current_day.isoformat(),
                    "total_words": len(known),
                    "words_by_status": count_by_status(known),
                    "practice_count": len(practiced),
                    "accuracy": round(average, 2),
                }
            )
            current_day += timedelta(days=1)

        logger.debug(
            "Historique de progression pour %s: %s points", self.owner_id, len(data_points)
        )
        return {
            "data_points": data_points,
            "date_range": {"start": start.isoformat(), "end": today.isoformat()},
        }


__all__ = ["HistoryService"]
