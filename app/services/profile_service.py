# /app/services/profile_service.py

import logging
from typing import Optional

from ..models.user_model import Identity, ProfileSyncResult, UserProfile
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

DEFAULT_FULLNAME = "Creator"


def build_fallback_profile(identity: Identity) -> UserProfile:
    """Profile seeded from identity metadata, used when no stored row can be had."""
    email_local_part = identity.email.split("@")[0] if identity.email else ""
    return UserProfile(
        id=identity.id,
        fullname=identity.full_name or email_local_part or DEFAULT_FULLNAME,
        avatar=identity.avatar_url or "",
        apikey=identity.apikey or "",
    )


def sync_user_profile(identity: Identity, db: Optional[DatabaseService]) -> ProfileSyncResult:
    """
    Makes sure a `users` row exists for the identity and returns it.

    Stored data wins over identity metadata. This function is best-effort and
    never raises: lookup and insert failures (or missing storage) yield the
    fallback profile with persisted=False, and a later sync tries the insert again.
    """
    fallback = build_fallback_profile(identity)
    if db is None:
        return ProfileSyncResult(profile=fallback, persisted=False)

    try:
        existing = db.get_user_by_id(identity.id)
    except Exception as e:
        logger.error("Profile lookup failed for user %s, using fallback profile: %s", identity.id, e)
        return ProfileSyncResult(profile=fallback, persisted=False)

    if existing is not None:
        return ProfileSyncResult(profile=UserProfile.model_validate(existing), persisted=True)

    try:
        inserted = db.add_user(fallback.model_dump())
    except Exception as e:
        logger.error("Error creating user profile in DB for %s: %s", identity.id, e)
        return ProfileSyncResult(profile=fallback, persisted=False)

    logger.info("Created profile for user %s", identity.id)
    return ProfileSyncResult(profile=UserProfile.model_validate(inserted), persisted=True)
