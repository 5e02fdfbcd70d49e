"""Endpoints de session de pratique du vocabulaire."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from wordwise.api.v2.dependencies import get_clock, get_current_user, get_db, get_shuffler
from wordwise.core.clock import Clock
from wordwise.core.config import settings
from wordwise.core.randomness import Shuffler
from wordwise.models.user.user_model import User
from wordwise.schemas.vocabulary_schema import PracticeResultIn, VocabularyItemOut
from wordwise.services.exceptions import VocabularyEngineError
from wordwise.services.practice_service import PracticeService
from wordwise.services.review_service import ReviewService

router = APIRouter()


@router.get("/words", response_model=List[VocabularyItemOut], summary="Mots à pratiquer")
def get_practice_words(
    limit: int = Query(settings.PRACTICE_DEFAULT_LIMIT, le=settings.PRACTICE_MAX_LIMIT),
    difficulty: Optional[str] = Query(None),
    review_status: Optional[str] = Query(None, alias="reviewStatus"),
    theme: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    shuffler: Shuffler = Depends(get_shuffler),
):
    """Sélectionne les mots prioritaires (peu révisés, souvent ratés)."""
    service = PracticeService(db=db, owner_id=current_user.id, shuffler=shuffler)
    try:
        return service.select_for_practice(
            limit=limit, difficulty=difficulty, review_status=review_status, theme=theme
        )
    except VocabularyEngineError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.post("/result", response_model=VocabularyItemOut, summary="Enregistrer un résultat de pratique")
def record_practice_result(
    payload: PracticeResultIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    clock: Clock = Depends(get_clock),
):
    """Met à jour les compteurs, le statut et la prochaine date de révision."""
    service = ReviewService(db=db, owner_id=current_user.id, clock=clock)
    try:
        return service.record_attempt(payload.item_id, payload.is_correct)
    except VocabularyEngineError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
