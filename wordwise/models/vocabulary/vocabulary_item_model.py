"""Vocabulary items and their spaced-repetition review state."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wordwise.db.base_class import Base

if TYPE_CHECKING:
    from ..user.user_model import User


class DifficultyLevel(str, enum.Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class ReviewStatus(str, enum.Enum):
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"
    REVIEW = "review"


class VocabularyItem(Base):
    """A word or phrase owned by one learner.

    Review fields (status, counters, timestamps) are only written by
    :class:`wordwise.services.review_service.ReviewService`. ``version_id`` is
    bumped by SQLAlchemy on every UPDATE, which turns a concurrent write into a
    ``StaleDataError`` instead of a lost update.
    """

    __tablename__ = "vocabulary_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    word: Mapped[str] = mapped_column(String(200), nullable=False)
    phonetic: Mapped[Optional[str]] = mapped_column(String(100))
    common_meaning: Mapped[Optional[str]] = mapped_column(Text)
    tag_themes: Mapped[List[str]] = mapped_column(JSON, default=list)
    tag_actions: Mapped[List[str]] = mapped_column(JSON, default=list)

    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        Enum(DifficultyLevel, name="difficultylevel", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=DifficultyLevel.A1,
    )
    review_status: Mapped[ReviewStatus] = mapped_column(
        Enum(ReviewStatus, name="reviewstatus", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ReviewStatus.NEW,
        index=True,
    )
    review_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    incorrect_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    next_review_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    owner: Mapped["User"] = relationship(back_populates="vocabulary_items")

    __mapper_args__ = {"version_id_col": version_id}


__all__ = ["DifficultyLevel", "ReviewStatus", "VocabularyItem"]
