"""Statistiques et historique de progression du vocabulaire."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from wordwise.api.v2.dependencies import get_clock, get_current_user, get_db
from wordwise.core.clock import Clock
from wordwise.core.config import settings
from wordwise.models.user.user_model import User
from wordwise.schemas.vocabulary_schema import (
    ProgressHistoryOut,
    VocabularyItemOut,
    VocabularyStatisticsOut,
)
from wordwise.services.exceptions import VocabularyEngineError
from wordwise.services.history_service import HistoryService
from wordwise.services.practice_service import PracticeService
from wordwise.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("/statistics", response_model=VocabularyStatisticsOut, summary="Statistiques du vocabulaire")
def get_vocabulary_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
) -> dict:
    service = StatisticsService(db=db, owner_id=current_user.id, clock=clock)
    return service.compute_statistics()


@router.get(
    "/progress-history",
    response_model=ProgressHistoryOut,
    summary="Historique de progression (approximation)",
)
def get_progress_history(
    days: int = Query(settings.HISTORY_DEFAULT_DAYS),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
) -> dict:
    """Reconstruit une série quotidienne à partir de l'état actuel des mots."""
    service = HistoryService(db=db, owner_id=current_user.id, clock=clock)
    try:
        return service.project_history(days)
    except VocabularyEngineError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("/{item_id}/related", response_model=List[VocabularyItemOut], summary="Mots associés")
def get_related_words(
    item_id: int,
    limit: int = Query(10, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = PracticeService(db=db, owner_id=current_user.id)
    try:
        return service.find_related_words(item_id, limit=limit)
    except VocabularyEngineError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
