# /app/services/content_service.py

"""
Create/read/update/delete of saved generations, each owned by a user.

Ownership is enforced here rather than left to the caller. Any signed-in
caller may open a single item, which comes back with an `is_owner` flag so
that other users' items can be shown read-only. Listing is scoped to the
caller's own rows, and updates/deletes by anyone other than the owner raise
ForbiddenError. Concurrent edits by the same owner are last-write-wins.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..core.errors import CorruptedContentError, ForbiddenError, NotFoundError, UnauthenticatedError
from ..models.content_model import ContentItemView, DatabaseItem, GeneratedContent
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- HELPER FUNCTIONS ---

def _require_caller(caller_id: Optional[str]) -> str:
    if not caller_id:
        raise UnauthenticatedError("User must be logged in to save content.")
    return caller_id


def _load_owned_row(db: DatabaseService, item_id: int, caller_id: str):
    """Returns the row if the caller owns it; distinguishes missing from foreign."""
    row = db.get_content_by_id(item_id)
    if row is None:
        raise NotFoundError(f"Content item {item_id} not found.")
    if row.user_id != caller_id:
        logger.warning("User %s attempted to modify content %s owned by another user", caller_id, item_id)
        raise ForbiddenError()
    return row


def _read_content(row) -> GeneratedContent:
    try:
        return GeneratedContent.model_validate(row.data)
    except ValidationError as e:
        logger.error("Content record %s has unreadable data: %s", row.id, e)
        raise CorruptedContentError() from e


def _matches(item: DatabaseItem, search_lower: str) -> bool:
    return search_lower in item.topic.lower() or search_lower in item.data.content.lower()


# --- PUBLIC SERVICE FUNCTIONS ---

def save_content(db: DatabaseService, topic: str, content: GeneratedContent, owner_id: Optional[str]) -> DatabaseItem:
    owner_id = _require_caller(owner_id)
    row = db.add_content_record({
        "topic": topic,
        "data": content.model_dump(mode="json"),
        "user_id": owner_id,
    })
    logger.info("Saved content %s for user %s", row.id, owner_id)
    return DatabaseItem.model_validate(row)


def get_content_by_id(db: DatabaseService, item_id: int, caller_id: Optional[str]) -> ContentItemView:
    caller_id = _require_caller(caller_id)
    row = db.get_content_by_id(item_id)
    if row is None:
        raise NotFoundError(f"Content item {item_id} not found.")
    return ContentItemView(
        id=row.id,
        created_at=row.created_at,
        topic=row.topic,
        data=_read_content(row),
        user_id=row.user_id,
        is_owner=row.user_id == caller_id,
    )


def list_contents(db: DatabaseService, caller_id: Optional[str], search: Optional[str] = None) -> List[DatabaseItem]:
    """The caller's saved items, newest first. An empty list is a valid answer."""
    caller_id = _require_caller(caller_id)
    items = []
    for row in db.get_contents_by_user_id(caller_id):
        try:
            items.append(DatabaseItem.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping corrupted content record %s: %s", getattr(row, "id", "N/A"), e)
            continue

    if search and search.strip():
        search_lower = search.strip().lower()
        items = [item for item in items if _matches(item, search_lower)]
    return items


def update_content(db: DatabaseService, item_id: int, content: GeneratedContent, caller_id: Optional[str]) -> DatabaseItem:
    """Replaces the whole `data` document; topic, owner and timestamps are untouched."""
    caller_id = _require_caller(caller_id)
    _load_owned_row(db, item_id, caller_id)
    row = db.update_content_data(item_id, content.model_dump(mode="json"))
    if row is None:
        # Deleted between the ownership check and the write.
        raise NotFoundError(f"Content item {item_id} not found.")
    return DatabaseItem.model_validate(row)


def update_content_text(db: DatabaseService, item_id: int, text: str, caller_id: Optional[str]) -> DatabaseItem:
    """Edits only the main body text of a saved item."""
    caller_id = _require_caller(caller_id)
    row = _load_owned_row(db, item_id, caller_id)
    current = _read_content(row)
    return update_content(db, item_id, current.model_copy(update={"content": text}), caller_id)


def delete_content(db: DatabaseService, item_id: int, caller_id: Optional[str]) -> None:
    caller_id = _require_caller(caller_id)
    _load_owned_row(db, item_id, caller_id)
    if not db.delete_content_record(item_id):
        raise NotFoundError(f"Content item {item_id} not found.")
    logger.info("Deleted content %s for user %s", item_id, caller_id)
