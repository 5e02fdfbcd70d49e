"""Utility helpers for test factories."""

from __future__ import annotations

from datetime import datetime, timezone

from wordwise.models.user.user_model import User
from wordwise.models.vocabulary.vocabulary_item_model import (
    DifficultyLevel,
    ReviewStatus,
    VocabularyItem,
)

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self._now = now

    def now(self) -> datetime:
        return self._now


class IdentityShuffler:
    """Keeps the ranked order so tests can assert on it."""

    def shuffle(self, items) -> None:
        return None


def create_user(db, **kwargs) -> User:
    defaults = {
        "username": "user",
        "email": "user@example.com",
        "is_active": True,
        "created_at": NOW,
    }
    defaults.update(kwargs)
    user = User(**defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_vocabulary_item(db, owner_id: int, **kwargs) -> VocabularyItem:
    defaults = {
        "word": "serendipity",
        "difficulty_level": DifficultyLevel.B2,
        "review_status": ReviewStatus.NEW,
        "review_count": 0,
        "correct_count": 0,
        "incorrect_count": 0,
        "tag_themes": [],
        "tag_actions": [],
        "created_at": NOW,
    }
    defaults.update(kwargs)
    item = VocabularyItem(owner_id=owner_id, **defaults)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item
