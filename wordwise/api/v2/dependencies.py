import logging
import re
from urllib.parse import unquote

from fastapi import Depends, HTTPException, Request, status
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from wordwise.core import security
from wordwise.core.clock import Clock, SystemClock
from wordwise.core.randomness import RandomShuffler, Shuffler
from wordwise.db.session import get_db
from wordwise.models.user.user_model import User

log = logging.getLogger(__name__)


def get_clock() -> Clock:
    return SystemClock()


def get_shuffler() -> Shuffler:
    return RandomShuffler()


def _normalize_token_value(raw_token: str | None) -> str | None:
    """Return a clean JWT string extracted from headers, cookies or queries.

    Browsers can percent-encode cookie values (``Bearer%20…``) and some
    frontends send quoted strings; a case-insensitive ``Bearer`` prefix is
    accepted as well.
    """

    if raw_token is None:
        return None

    token = raw_token.strip().strip('"').strip("'")
    if not token:
        return None

    token = unquote(token)

    match = re.match(r"^(bearer|token)[\s,:]+(.+)$", token, flags=re.IGNORECASE)
    if match:
        token = match.group(2)

    token = token.strip()
    return token or None


def _decode_user_from_token(token: str | None, db: Session) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )

    token = _normalize_token_value(token)
    if not token:
        log.warning("Validation échouée: Pas de token fourni.")
        raise credentials_exception

    try:
        payload = security.decode_access_token(token)
        user_id_str = payload.get("sub")
        if user_id_str is None:
            log.warning("Validation échouée: Le token ne contient pas de 'sub'.")
            raise credentials_exception
        user_id = int(user_id_str)
    except ExpiredSignatureError:
        log.warning("Validation échouée: Le token a expiré.")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="token_expired")
    except (JWTError, ValueError, TypeError):
        log.warning("Validation échouée: Le token est invalide ou mal formé.")
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        log.warning("Validation échouée: Utilisateur avec ID %s non trouvé.", user_id)
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="inactive_user")

    return user


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token_sources = (
        request.headers.get("Authorization"),
        request.cookies.get("access_token"),
        request.query_params.get("access_token"),
    )

    for candidate in token_sources:
        if _normalize_token_value(candidate):
            return _decode_user_from_token(candidate, db)

    return _decode_user_from_token(None, db)
