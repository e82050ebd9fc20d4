# /app/models/content_model.py

# --- Core Imports ---
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enumerations for Generation Options ---
class ContentMode(str, Enum):
    GENERAL = "general"
    TRAVEL = "travel"
    MYTH_STORYTELLING = "myth-storytelling"
    TTS = "tts"
    MARKETING = "marketing"
    SALES = "sales"
    LIFESTYLE = "lifestyle"

class ContentStyle(str, Enum):
    GENERAL = "general"
    EMOTIONAL = "emotional"
    CINEMATIC = "cinematic"
    CONVERSATIONAL = "conversational"
    EDUCATIONAL = "educational"
    MYSTERY = "mystery"
    HUMOR = "humor"
    MOTIVATIONAL = "motivational"

class ContentLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


def _require_text(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    return value


# --- Generation Contract ---
class GenerationRequest(BaseModel):
    topic: str
    mode: ContentMode = ContentMode.GENERAL
    style: ContentStyle = ContentStyle.GENERAL
    length: ContentLength = ContentLength.MEDIUM

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        return _require_text(v, "topic")


class GeneratedContent(BaseModel):
    """
    The model's structured answer. `captions` is expected to hold three items
    but the length is deliberately not enforced; the model's output is trusted
    as long as the field types match.
    """
    content: str
    captions: List[str]
    hashtags: List[str]
    cta: Optional[str] = None
    alt_version: Optional[str] = None
    keywords: Optional[List[str]] = None
    visual_guide: Optional[str] = None
    tone_used: str


# --- Persistence Contract ---
class DatabaseItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    topic: str
    data: GeneratedContent
    user_id: str


class ContentItemView(DatabaseItem):
    """A single item as any signed-in user may read it; only the owner may edit."""
    is_owner: bool


class ContentSaveRequest(BaseModel):
    topic: str
    data: GeneratedContent

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        return _require_text(v, "topic")


class ContentUpdateRequest(BaseModel):
    data: GeneratedContent


class ContentTextUpdateRequest(BaseModel):
    """Edits only the main body text of a saved item, leaving captions etc. intact."""
    content: str = Field(..., min_length=1)


class ContentListResponse(BaseModel):
    results: List[DatabaseItem]
    total: int
