# /app/services/generation_service.py

import logging

from ..core.errors import MissingKeyError
from ..models.content_model import GeneratedContent, GenerationRequest
from ..models.user_model import Identity
from . import auth_service, gemini_service, profile_service
from .crypto_service import get_cipher
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


async def generate_for_user(request: GenerationRequest, identity: Identity, db: DatabaseService) -> GeneratedContent:
    """
    Generates content with the caller's own Gemini key: the stored ciphertext
    is read from their profile, decrypted, and handed to the Gemini client.
    """
    full_identity = auth_service.resolve_identity(db, identity)
    profile = profile_service.sync_user_profile(full_identity, db).profile
    if not profile.apikey:
        raise MissingKeyError()

    # Strict so that a wrong ENCRYPTION_KEY reads as a decryption problem, not a missing key.
    api_key = get_cipher().decrypt_strict(profile.apikey)
    if not api_key:
        raise MissingKeyError()

    logger.info("Generating content for user %s (mode=%s, style=%s, length=%s)",
                identity.id, request.mode.value, request.style.value, request.length.value)
    return await gemini_service.generate_viral_content(request, api_key)
