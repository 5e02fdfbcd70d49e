"""Selection of vocabulary items for a practice session."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from wordwise.core.randomness import RandomShuffler, Shuffler
from wordwise.crud import vocabulary_crud
from wordwise.models.vocabulary.vocabulary_item_model import (
    DifficultyLevel,
    ReviewStatus,
    VocabularyItem,
)
from wordwise.services.exceptions import InvalidPracticeInput
from wordwise.services.scheduling import PRACTICED_ENOUGH_REVIEWS, compute_accuracy

logger = logging.getLogger(__name__)

WELL_KNOWN_MIN_REVIEWS = 10
WELL_KNOWN_ACCURACY = 0.9
WELL_KNOWN_DAMPENING = 0.3
PRACTICED_ENOUGH_DAMPENING = 0.1


def compute_priority_score(review_count: int, correct_count: int, incorrect_count: int) -> float:
    """Weight of an item in the practice ranking.

    Fresh and error-prone items score highest. Items that are both frequently
    reviewed and accurately answered are dampened, never zeroed, so they still
    surface occasionally.
    """
    review_count = review_count or 0
    accuracy = compute_accuracy(correct_count, incorrect_count)

    base_priority = 1 / (review_count + 1)
    accuracy_factor = 1 - accuracy
    score = base_priority * (1 + accuracy_factor)

    if review_count > WELL_KNOWN_MIN_REVIEWS and accuracy > WELL_KNOWN_ACCURACY:
        score *= WELL_KNOWN_DAMPENING
    if review_count >= PRACTICED_ENOUGH_REVIEWS:
        score *= PRACTICED_ENOUGH_DAMPENING
    return score


def parse_difficulty(value: str | DifficultyLevel | None) -> Optional[DifficultyLevel]:
    if value is None or value == "":
        return None
    try:
        return DifficultyLevel(value)
    except ValueError as exc:
        raise InvalidPracticeInput("invalid_difficulty") from exc


def parse_review_status(value: str | ReviewStatus | None) -> Optional[ReviewStatus]:
    if value is None or value == "":
        return None
    try:
        return ReviewStatus(value)
    except ValueError as exc:
        raise InvalidPracticeInput("invalid_review_status") from exc


class PracticeService:
    """Builds practice sessions for one learner."""

    def __init__(self, db: Session, owner_id: int, shuffler: Shuffler | None = None):
        self.db = db
        self.owner_id = owner_id
        self.shuffler = shuffler or RandomShuffler()

    def select_for_practice(
        self,
        limit: int,
        difficulty: str | DifficultyLevel | None = None,
        review_status: str | ReviewStatus | None = None,
        theme: str | None = None,
    ) -> List[VocabularyItem]:
        """Return at most ``limit`` items, highest priority first, then shuffled.

        Only the selected slice is permuted so the drill order varies between
        calls without letting low-priority items in.
        """
        if limit is None or limit <= 0:
            raise InvalidPracticeInput("invalid_limit")
        difficulty_level = parse_difficulty(difficulty)
        status = parse_review_status(review_status)

        candidates = vocabulary_crud.list_by_owner(
            self.db,
            self.owner_id,
            difficulty=difficulty_level,
            review_status=status,
            theme=theme,
        )

        ranked = sorted(
            candidates,
            key=lambda item: compute_priority_score(
                item.review_count, item.correct_count, item.incorrect_count
            ),
            reverse=True,
        )
        selected = ranked[:limit]
        self.shuffler.shuffle(selected)

        logger.debug(
            "Session de pratique pour %s: %s/%s mots sélectionnés",
            self.owner_id,
            len(selected),
            len(candidates),
        )
        return selected

    def find_related_words(self, item_id: int, limit: int = 10) -> List[VocabularyItem]:
        """Other items at the same level sharing at least one theme or action tag.

        Unknown items yield an empty list. Items without any tag are related
        to every other item of the same level.
        """
        if limit is None or limit <= 0:
            raise InvalidPracticeInput("invalid_limit")

        item = vocabulary_crud.get_by_id(self.db, self.owner_id, item_id)
        if item is None:
            return []

        themes = set(item.tag_themes or [])
        actions = set(item.tag_actions or [])

        related: List[VocabularyItem] = []
        for candidate in vocabulary_crud.list_by_owner(
            self.db, self.owner_id, difficulty=item.difficulty_level
        ):
            if candidate.id == item.id:
                continue
            if themes or actions:
                shares_theme = bool(themes.intersection(candidate.tag_themes or []))
                shares_action = bool(actions.intersection(candidate.tag_actions or []))
                if not (shares_theme or shares_action):
                    continue
            related.append(candidate)
            if len(related) >= limit:
                break
        return related


__all__ = [
    "PracticeService",
    "compute_priority_score",
    "parse_difficulty",
    "parse_review_status",
]
