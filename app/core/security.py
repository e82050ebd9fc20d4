# /app/core/security.py

"""
Password hashing and session tokens.

Passwords are stored as bcrypt hashes. Sessions are a pair of HS256 JWTs:
a short-lived access token and a long-lived refresh token, told apart by
their `type` claim. Signing out revokes both by their `jti` until they expire.
"""

import logging
import threading
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from .config import get_settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def _encode(claims: Dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(subject: str, claims: Optional[Dict[str, Any]] = None) -> str:
    lifetime = timedelta(minutes=get_settings().jwt_expire_minutes)
    return _encode({"sub": subject, **(claims or {})}, ACCESS_TOKEN_TYPE, lifetime)


def create_refresh_token(subject: str) -> str:
    lifetime = timedelta(days=get_settings().jwt_refresh_expire_days)
    return _encode({"sub": subject}, REFRESH_TOKEN_TYPE, lifetime)


# --- Revocation ---
# Signed-out token ids, kept in process memory until the token would have
# expired anyway. A restart forgets them.
_revoked: Dict[str, float] = {}
_revoked_lock = threading.Lock()


def revoke_token(claims: Dict[str, Any]):
    """Marks a decoded token as unusable for the rest of its lifetime."""
    jti = claims.get("jti")
    if not jti:
        return
    now = time.time()
    with _revoked_lock:
        for expired_jti in [k for k, exp in _revoked.items() if exp <= now]:
            del _revoked[expired_jti]
        _revoked[jti] = float(claims.get("exp", now))


def is_revoked(jti: Optional[str]) -> bool:
    if not jti:
        return False
    with _revoked_lock:
        return jti in _revoked


def decode_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Optional[Dict[str, Any]]:
    """Returns the claims of a valid, unrevoked token of the expected type, otherwise None."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired %s token", expected_type)
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected invalid %s token: %s", expected_type, e)
        return None

    if payload.get("type") != expected_type or not payload.get("sub"):
        logger.warning("Rejected token with unexpected type %r", payload.get("type"))
        return None
    if is_revoked(payload.get("jti")):
        logger.info("Rejected signed-out %s token for user %s", expected_type, payload["sub"])
        return None
    return payload
