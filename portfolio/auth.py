"""
Auth admin unique : JWT HS256 signé avec SESSION_SECRET.
Le token porte l'email ; seul ADMIN_EMAIL est accepté.
Token absent ou invalide ≡ non autorisé.
"""
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import jwt
from fastapi import HTTPException, Request

log = logging.getLogger(__name__)

ALGORITHM = "HS256"
COOKIE_NAME = "auth_token"


def _secret() -> str:
    return os.getenv("SESSION_SECRET", "changeme")


def admin_email() -> str:
    return os.getenv("ADMIN_EMAIL", "admin@example.com")


def ttl_days() -> int:
    return int(os.getenv("TOKEN_TTL_DAYS", "7"))


def default_credentials() -> List[str]:
    """Variables d'auth non définies : les valeurs par défaut (« changeme ») sont actives."""
    return [k for k in ("SESSION_SECRET", "ADMIN_EMAIL", "ADMIN_PASSWORD") if not os.getenv(k)]


def issue_token(email: str, days: Optional[int] = None) -> str:
    exp = datetime.now(timezone.utc) + timedelta(days=days if days is not None else ttl_days())
    return jwt.encode({"email": email, "exp": exp}, _secret(), algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """Retourne le payload si signature + expiration + email admin OK, sinon None."""
    try:
        payload = jwt.decode(token, _secret(), algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        log.warning("Token rejeté : %s", e)
        return None
    if payload.get("email") != admin_email():
        log.warning("Token rejeté : email non admin")
        return None
    return payload


def bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):]


def require_admin(request: Request) -> dict:
    token = bearer_token(request)
    payload = verify_token(token) if token else None
    if payload is None:
        raise HTTPException(401, "Unauthorized")
    return payload
