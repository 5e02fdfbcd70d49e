# Fichier: wordwise/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Any, Union

from jose import jwt

from wordwise.core.config import settings

# --- Configuration de la Sécurité ---
ALGORITHM = "HS256"

def create_access_token(subject: Union[str, Any], expires_delta: timedelta = None) -> str:
    """Crée un token d'accès JWT."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Décode et vérifie un token; lève ``JWTError`` s'il est invalide ou expiré."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
