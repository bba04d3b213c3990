# jobboard/middleware/auth_middleware.py
"""
Caller identity for job reads.

Every job endpoint is public. A Bearer token, when present and valid, only
tells us whose search history to update; a missing, expired or forged token
is treated as an anonymous caller and never rejects the request.
"""
import logging
from typing import Optional

import jwt  # PyJWT
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobboard.config import JWT_ALGO, JWT_LEEWAY_SEC, JWT_SECRET

log = logging.getLogger("auth")

bearer = HTTPBearer(auto_error=False)


class InvalidToken(Exception):
    pass


def user_id_from_token(token: str) -> str:
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGO], leeway=JWT_LEEWAY_SEC)
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("token expired") from e
    except jwt.PyJWTError as e:
        raise InvalidToken("token rejected") from e

    sub = claims.get("sub")
    if isinstance(sub, bool) or not isinstance(sub, (str, int)) or not str(sub).strip():
        raise InvalidToken("token has no subject")
    return str(sub)


def optional_user_id(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[str]:
    """Soft auth dependency: user id for a valid token, else None."""
    if credentials is None or (credentials.scheme or "").lower() != "bearer":
        return None
    token = (credentials.credentials or "").strip()
    if not token:
        return None
    try:
        return user_id_from_token(token)
    except InvalidToken as e:
        log.debug("anonymous request: %s", e)
        return None
