# Fichier: wordwise/api/v2/api.py
from fastapi import APIRouter
from .endpoints import (
    practice_router,
    vocabulary_router,
)

api_router = APIRouter()

api_router.include_router(practice_router.router, prefix="/practice", tags=["Practice"])
api_router.include_router(vocabulary_router.router, prefix="/vocabulary", tags=["Vocabulary"])
