# /app/routers/content_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from ..core.deps import get_current_identity
from ..models import content_model
from ..models.user_model import Identity
from ..services import content_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- CONTENT COLLECTION ENDPOINTS (/api/content) ---

@router.get("", response_model=content_model.ContentListResponse, summary="List Saved Content")
def list_saved_content(
    search: Optional[str] = None,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    """The caller's saved items, most recent first."""
    results = content_service.list_contents(db, caller_id=identity.id, search=search)
    return content_model.ContentListResponse(results=results, total=len(results))

@router.post("", response_model=content_model.DatabaseItem, status_code=status.HTTP_201_CREATED, summary="Save Generated Content")
def save_generated_content(
    payload: content_model.ContentSaveRequest,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    return content_service.save_content(db, topic=payload.topic, content=payload.data, owner_id=identity.id)

# --- INDIVIDUAL CONTENT ENDPOINTS (/api/content/{item_id}) ---

@router.get("/{item_id}", response_model=content_model.ContentItemView, summary="Get a Saved Item")
def get_saved_content(item_id: int, identity: Identity = Depends(get_current_identity), db: DatabaseService = Depends(get_db_service)):
    """Any signed-in user may read an item; `is_owner` tells the client whether editing is allowed."""
    return content_service.get_content_by_id(db, item_id, caller_id=identity.id)

@router.put("/{item_id}", response_model=content_model.DatabaseItem, summary="Replace a Saved Item's Content")
def update_saved_content(
    item_id: int,
    payload: content_model.ContentUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    return content_service.update_content(db, item_id, payload.data, caller_id=identity.id)

@router.patch("/{item_id}/content", response_model=content_model.DatabaseItem, summary="Edit a Saved Item's Main Text")
def edit_saved_content_text(
    item_id: int,
    payload: content_model.ContentTextUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: DatabaseService = Depends(get_db_service)
):
    return content_service.update_content_text(db, item_id, payload.content, caller_id=identity.id)

@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a Saved Item",
    responses={403: {"description": "Item belongs to another user"}, 404: {"description": "Item not found"}}
)
def delete_saved_content(item_id: int, identity: Identity = Depends(get_current_identity), db: DatabaseService = Depends(get_db_service)):
    content_service.delete_content(db, item_id, caller_id=identity.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
