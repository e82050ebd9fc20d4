# /app/routers/generate_router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_identity
from ..core.errors import AppError
from ..models.content_model import GeneratedContent, GenerationRequest
from ..models.user_model import Identity
from ..services import generation_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "",
    response_model=GeneratedContent,
    summary="Generate Viral Content",
    description="Turns a topic plus mode/style/length options into structured content using the caller's own Gemini key."
)
async def generate_content(
    request: GenerationRequest,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    try:
        return await generation_service.generate_for_user(request, identity, db)
    except AppError:
        # Rendered by the shared handler with its own status and error code.
        raise
    except Exception as e:
        logger.exception("Unexpected error during generation for user %s", identity.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred.") from e
