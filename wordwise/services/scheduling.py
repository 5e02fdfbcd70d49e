"""Pure spaced-repetition rules shared by the review and practice services."""

from __future__ import annotations

import math

from wordwise.models.vocabulary.vocabulary_item_model import ReviewStatus

MASTERY_ACCURACY = 0.8
MASTERY_MIN_REVIEWS = 3
PRACTICED_ENOUGH_REVIEWS = 30

# Fixed onboarding intervals, indexed by review count.
ONBOARDING_INTERVALS = {0: 1, 1: 1, 2: 3, 3: 7}

HIGH_ACCURACY = 0.9
MEDIUM_ACCURACY = 0.7
HIGH_ACCURACY_CAP_DAYS = 30
MEDIUM_ACCURACY_CAP_DAYS = 14
LOW_ACCURACY_INTERVAL_DAYS = 2


def compute_accuracy(correct_count: int | None, incorrect_count: int | None) -> float:
    """Share of correct attempts, ``0.0`` when nothing was attempted."""
    correct = correct_count or 0
    total = correct + (incorrect_count or 0)
    if total == 0:
        return 0.0
    return correct / total


def calculate_next_interval_days(review_count: int, accuracy: float) -> int:
    """Number of whole days until the next review.

    The first reviews follow fixed steps (1, 1, 3, 7 days). Afterwards the
    interval grows geometrically with the review count for accurate learners,
    slower for average ones, and stays short for struggling ones.
    """
    if review_count < 0:
        raise ValueError("review_count must be non-negative")

    if review_count in ONBOARDING_INTERVALS:
        return ONBOARDING_INTERVALS[review_count]

    exponent = review_count - 2
    if accuracy >= HIGH_ACCURACY:
        days = min(HIGH_ACCURACY_CAP_DAYS, math.floor(7 * 1.5**exponent))
    elif accuracy >= MEDIUM_ACCURACY:
        days = min(MEDIUM_ACCURACY_CAP_DAYS, math.floor(3 * 1.3**exponent))
    else:
        days = LOW_ACCURACY_INTERVAL_DAYS
    return max(1, days)


def resolve_review_status(
    current: ReviewStatus,
    review_count: int,
    accuracy: float,
    is_correct: bool,
) -> ReviewStatus:
    """Status after an attempt, given the already-incremented counters.

    A miss on a mastered item always sends it back to ``review``, even when
    the lifetime accuracy still clears the mastery bar; the next correct
    attempt can promote it again.
    """
    if current == ReviewStatus.MASTERED and not is_correct:
        return ReviewStatus.REVIEW
    if review_count >= PRACTICED_ENOUGH_REVIEWS and accuracy >= MASTERY_ACCURACY:
        return ReviewStatus.MASTERED
    if accuracy >= MASTERY_ACCURACY and review_count >= MASTERY_MIN_REVIEWS:
        return ReviewStatus.MASTERED
    if current == ReviewStatus.NEW:
        return ReviewStatus.LEARNING
    return current


__all__ = [
    "calculate_next_interval_days",
    "compute_accuracy",
    "resolve_review_status",
]
