# /app/services/auth_service.py

"""
Sign-up, sign-in and session lifecycle.

Every session transition is published on the process-wide `session_events`
bus as one of SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED or INITIAL_SESSION.
Subscribers register with `on_session_change(handler)` and must call the
returned unsubscribe function when they are torn down.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError

from ..core import security
from ..core.config import get_settings
from ..core.deps import identity_from_claims
from ..core.errors import AuthError, UnauthenticatedError
from ..models.user_model import AuthSession, Identity, SessionEventType
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- SESSION EVENTS ---

@dataclass(frozen=True)
class SessionEvent:
    type: SessionEventType
    identity: Optional[Identity]


SessionHandler = Callable[[SessionEvent], None]


class SessionEventBus:
    """Synchronous publish/subscribe for session transitions."""

    def __init__(self):
        self._handlers: List[SessionHandler] = []
        self._lock = threading.Lock()

    def on_session_change(self, handler: SessionHandler) -> Callable[[], None]:
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe():
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    def emit(self, event: SessionEvent):
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Session handler %r failed on %s", handler, event.type.value)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._handlers)


session_events = SessionEventBus()


def on_session_change(handler: SessionHandler) -> Callable[[], None]:
    return session_events.on_session_change(handler)


# --- HELPERS ---

def _identity_from_record(record) -> Identity:
    metadata = record.user_metadata or {}
    return Identity(
        id=record.id,
        email=record.email,
        full_name=metadata.get("full_name"),
        avatar_url=metadata.get("avatar_url"),
        apikey=metadata.get("apikey"),
    )


def _identity_claims(identity: Identity) -> dict:
    # The encrypted key claim is deliberately left out of tokens.
    return {
        "email": identity.email,
        "full_name": identity.full_name,
        "avatar_url": identity.avatar_url,
    }


def _issue_session(identity: Identity, refresh_token: Optional[str] = None) -> AuthSession:
    return AuthSession(
        access_token=security.create_access_token(identity.id, _identity_claims(identity)),
        refresh_token=refresh_token or security.create_refresh_token(identity.id),
        expires_in=get_settings().jwt_expire_minutes * 60,
        identity=identity,
    )


# --- PUBLIC SERVICE FUNCTIONS ---

def sign_up(db: DatabaseService, email: str, password: str, fullname: str, encrypted_api_key: str) -> Identity:
    """
    Registers a credential record. The key arrives already encrypted and is
    kept in the identity's metadata, from where Profile Sync copies it.
    """
    if db.get_identity_by_email(email):
        raise AuthError("User already registered", status_code=400)

    record = {
        "id": str(uuid.uuid4()),
        "email": email,
        "password_hash": security.hash_password(password),
        "user_metadata": {
            "full_name": fullname,
            "apikey": encrypted_api_key,
        },
    }
    try:
        created = db.add_identity(record)
    except IntegrityError as e:
        # Lost a race with a concurrent sign-up for the same email.
        raise AuthError("User already registered", status_code=400) from e

    logger.info("Registered new identity %s", created.id)
    return _identity_from_record(created)


def sign_in(db: DatabaseService, email: str, password: str) -> AuthSession:
    record = db.get_identity_by_email(email)
    if record is None or not security.verify_password(password, record.password_hash):
        raise AuthError("Invalid login credentials")

    identity = _identity_from_record(record)
    session = _issue_session(identity)
    session_events.emit(SessionEvent(SessionEventType.SIGNED_IN, identity))
    return session


def restore_session(access_token: str) -> Identity:
    """Validates an existing access token, as on application start."""
    claims = security.decode_token(access_token, security.ACCESS_TOKEN_TYPE)
    if claims is None:
        raise UnauthenticatedError("Invalid or expired token")
    identity = identity_from_claims(claims)
    session_events.emit(SessionEvent(SessionEventType.INITIAL_SESSION, identity))
    return identity


def refresh_session(db: DatabaseService, refresh_token: str) -> AuthSession:
    claims = security.decode_token(refresh_token, security.REFRESH_TOKEN_TYPE)
    if claims is None:
        raise AuthError("Invalid or expired refresh token")
    record = db.get_identity_by_id(claims["sub"])
    if record is None:
        raise AuthError("User not found")

    identity = _identity_from_record(record)
    session = _issue_session(identity, refresh_token=refresh_token)
    session_events.emit(SessionEvent(SessionEventType.TOKEN_REFRESHED, identity))
    return session


def resolve_identity(db: DatabaseService, identity: Identity) -> Identity:
    """
    Re-reads the identity's metadata (including the encrypted key claim,
    which tokens do not carry). Falls back to the token's view on any failure.
    """
    try:
        record = db.get_identity_by_id(identity.id)
    except Exception as e:
        logger.warning("Could not reload identity %s: %s", identity.id, e)
        return identity
    return _identity_from_record(record) if record is not None else identity


def sign_out(identity: Identity, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
    """
    Revokes whichever of the session's tokens are given, then notifies
    subscribers. Revocation lives in process memory only.
    """
    for token, token_type in ((access_token, security.ACCESS_TOKEN_TYPE), (refresh_token, security.REFRESH_TOKEN_TYPE)):
        if not token:
            continue
        claims = security.decode_token(token, token_type)
        if claims is not None and claims["sub"] == identity.id:
            security.revoke_token(claims)
    session_events.emit(SessionEvent(SessionEventType.SIGNED_OUT, identity))
