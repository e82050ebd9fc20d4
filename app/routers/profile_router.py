# /app/routers/profile_router.py

from fastapi import APIRouter, Depends

from ..core.deps import get_current_identity
from ..models.user_model import Identity, ProfileView
from ..services import auth_service, profile_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

@router.get("/me", response_model=ProfileView, summary="Get the Current User's Profile")
def read_my_profile(
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    """
    Returns the caller's profile, creating it on first access. `persisted`
    is false when the profile could not be stored and is an in-memory fallback.
    """
    full_identity = auth_service.resolve_identity(db, identity)
    return ProfileView.from_sync_result(profile_service.sync_user_profile(full_identity, db))
