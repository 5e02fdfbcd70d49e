"""Schémas Pydantic pour la pratique et les statistiques de vocabulaire."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from wordwise.models.vocabulary.vocabulary_item_model import DifficultyLevel, ReviewStatus


class VocabularyItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    word: str
    phonetic: Optional[str] = None
    common_meaning: Optional[str] = None
    tag_themes: List[str] = Field(default_factory=list)
    tag_actions: List[str] = Field(default_factory=list)
    difficulty_level: DifficultyLevel
    review_status: ReviewStatus
    review_count: int
    correct_count: int
    incorrect_count: int
    last_reviewed_at: Optional[datetime] = None
    next_review_at: Optional[datetime] = None
    created_at: datetime


class PracticeResultIn(BaseModel):
    """Réponse d'un utilisateur à un mot pendant une session."""

    item_id: int = Field(..., ge=1)
    is_correct: bool


class TagCount(BaseModel):
    tag: str
    count: int


class VocabularyStatisticsOut(BaseModel):
    total_words: int = 0
    words_by_difficulty: Dict[str, int] = Field(default_factory=dict)
    words_by_review_status: Dict[str, int] = Field(default_factory=dict)
    words_by_tag: List[TagCount] = Field(default_factory=list)
    learning_streak: int = 0
    words_due_for_review: int = 0
    total_reviews: int = 0
    accuracy_rate: float = 0.0


class ProgressDataPoint(BaseModel):
    date: str
    total_words: int
    words_by_status: Dict[str, int]
    practice_count: int
    accuracy: float


class DateRange(BaseModel):
    start: str
    end: str


class ProgressHistoryOut(BaseModel):
    data_points: List[ProgressDataPoint]
    date_range: DateRange
