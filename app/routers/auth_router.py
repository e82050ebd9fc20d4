# /app/routers/auth_router.py

"""
This module defines the public-facing API for all authentication-related actions.

It includes endpoints for:
- Registration (`/sign-up`), which encrypts the caller's Gemini key before storing it
- Password sign-in (`/sign-in`), which also syncs the user's profile row
- Token refresh (`/refresh`) and sign-out (`/sign-out`)
- Restoring an existing session on application start (`/session`)

Each transition is published on the session event bus by `auth_service`.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from ..core.deps import bearer_scheme, get_current_identity
from ..core.errors import UnauthenticatedError
from ..models.user_model import (
    AuthSession,
    Identity,
    ProfileView,
    RefreshRequest,
    SessionResponse,
    SignInRequest,
    SignOutRequest,
    SignUpRequest,
)
from ..services import auth_service, profile_service
from ..services.crypto_service import get_cipher
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _session_with_profile(session: AuthSession, db: DatabaseService) -> SessionResponse:
    sync_result = profile_service.sync_user_profile(session.identity, db)
    # The ciphertext stays server-side; clients only learn whether a key exists.
    public_identity = session.identity.model_copy(update={"apikey": None})
    return SessionResponse(
        session=session.model_copy(update={"identity": public_identity}),
        profile=ProfileView.from_sync_result(sync_result),
    )


@router.post("/sign-up", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, db: DatabaseService = Depends(get_db_service)):
    """
    Registers a new user and signs them in immediately. A duplicate email is
    reported as a 400 by the shared error handler.
    """
    encrypted_key = get_cipher().encrypt(payload.apikey.strip())
    auth_service.sign_up(
        db=db,
        email=payload.email,
        password=payload.password,
        fullname=payload.fullname,
        encrypted_api_key=encrypted_key,
    )
    session = auth_service.sign_in(db, email=payload.email, password=payload.password)
    return _session_with_profile(session, db)


@router.post("/sign-in", response_model=SessionResponse)
def sign_in(payload: SignInRequest, db: DatabaseService = Depends(get_db_service)):
    session = auth_service.sign_in(db, email=payload.email, password=payload.password)
    return _session_with_profile(session, db)


@router.post("/refresh", response_model=AuthSession, response_model_exclude={"identity": {"apikey"}})
def refresh(payload: RefreshRequest, db: DatabaseService = Depends(get_db_service)):
    return auth_service.refresh_session(db, payload.refresh_token)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    payload: Optional[SignOutRequest] = None,
    identity: Identity = Depends(get_current_identity),
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
):
    """
    Revokes the bearer access token, and the refresh token when one is sent.
    Both stop working for the rest of this process.
    """
    refresh_token = payload.refresh_token if payload else None
    auth_service.sign_out(identity, access_token=credentials.credentials, refresh_token=refresh_token)


@router.get("/session", response_model=Identity, response_model_exclude={"apikey"})
def restore_session(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)):
    """Returns the identity behind a still-valid access token."""
    if not credentials:
        raise UnauthenticatedError("Not authenticated")
    return auth_service.restore_session(credentials.credentials)
