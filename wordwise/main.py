import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wordwise.core.config import settings
from wordwise.db.base import Base
from wordwise.api.v2.api import api_router
from wordwise.db import session as db_session

# --- Configuration du logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(
    title="Wordwise Practice API",
    openapi_url="/api/v2/openapi.json",
)


def _sanitize_origin(origin: str | None) -> str | None:
    if not origin:
        return None
    value = origin.strip()
    if not value:
        return None
    if not value.startswith("http"):
        value = f"https://{value}"
    return value.rstrip("/")


cors_origins = sorted(
    {origin for origin in (_sanitize_origin(o) for o in settings.BACKEND_CORS_ORIGINS) if origin}
)
logger.info("CORS origins configurés: %s", cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(api_router, prefix="/api/v2")


@app.on_event("startup")
def startup():
    logger.info("Vérification et création des tables de la base de données...")
    Base.metadata.create_all(bind=db_session.engine)
    logger.info("Les tables de la base de données sont prêtes.")


@app.get("/")
def read_root():
    return {"message": "Welcome to Wordwise Practice API!"}
