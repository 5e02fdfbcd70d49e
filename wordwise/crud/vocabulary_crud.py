# Fichier: wordwise/crud/vocabulary_crud.py
"""Vocabulary store: owner-scoped reads and version-checked writes."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from wordwise.models.vocabulary.vocabulary_item_model import (
    DifficultyLevel,
    ReviewStatus,
    VocabularyItem,
)

logger = logging.getLogger(__name__)


class ConcurrentModificationError(Exception):
    """The stored item changed between read and write."""

    def __init__(self, item_id: int):
        super().__init__(f"vocabulary item {item_id} was modified concurrently")
        self.item_id = item_id


def get_by_id(db: Session, owner_id: int, item_id: int) -> Optional[VocabularyItem]:
    return (
        db.query(VocabularyItem)
        .filter(VocabularyItem.id == item_id, VocabularyItem.owner_id == owner_id)
        .first()
    )


def list_by_owner(
    db: Session,
    owner_id: int,
    difficulty: Optional[DifficultyLevel] = None,
    review_status: Optional[ReviewStatus] = None,
    theme: Optional[str] = None,
) -> List[VocabularyItem]:
    """Return the owner's items matching every provided filter.

    Results are ordered by creation so ties in downstream rankings resolve
    the same way between calls.
    """
    query = db.query(VocabularyItem).filter(VocabularyItem.owner_id == owner_id)
    if difficulty is not None:
        query = query.filter(VocabularyItem.difficulty_level == difficulty)
    if review_status is not None:
        query = query.filter(VocabularyItem.review_status == review_status)

    items = query.order_by(VocabularyItem.created_at.asc(), VocabularyItem.id.asc()).all()

    # JSON containment is not portable across dialects, filter themes in Python.
    if theme:
        items = [item for item in items if theme in (item.tag_themes or [])]
    return items


def save(db: Session, item: VocabularyItem) -> VocabularyItem:
    """Flush pending changes on *item*.

    The UPDATE is guarded by the mapper's version column; a mismatch means
    another writer committed first and surfaces as
    :class:`ConcurrentModificationError`.
    """
    db.add(item)
    try:
        db.flush([item])
    except StaleDataError as exc:
        logger.warning("Conflit de version sur le mot %s", item.id)
        raise ConcurrentModificationError(item.id) from exc
    return item
