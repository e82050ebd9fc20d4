# /app/models/user_model.py

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field


class UserProfile(BaseModel):
    """A row of the `users` table. `apikey` is ciphertext, never plaintext."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    fullname: str
    avatar: str = ""
    apikey: str = ""


class ProfileSyncResult(BaseModel):
    profile: UserProfile
    # False when the profile is an in-memory fallback that was not stored.
    persisted: bool


class ProfileView(BaseModel):
    """What the API returns for a profile: the stored key is reduced to a flag."""
    id: str
    fullname: str
    avatar: str
    has_apikey: bool
    persisted: bool

    @classmethod
    def from_sync_result(cls, result: ProfileSyncResult) -> "ProfileView":
        profile = result.profile
        return cls(
            id=profile.id,
            fullname=profile.fullname,
            avatar=profile.avatar,
            has_apikey=bool(profile.apikey),
            persisted=result.persisted,
        )


class Identity(BaseModel):
    """An authenticated caller as the identity layer knows them."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    apikey: Optional[str] = None  # encrypted key claim captured at sign-up


def _normalize_email(value):
    # Case-insensitive lookup; the stored form is always lower case.
    return value.strip().lower() if isinstance(value, str) else value


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


# --- Request Contracts ---
class SignUpRequest(BaseModel):
    email: NormalizedEmail
    password: str = Field(..., min_length=6)
    fullname: str
    # Plaintext Gemini key; encrypted before it is stored anywhere.
    apikey: str = ""


class SignInRequest(BaseModel):
    email: NormalizedEmail
    password: str


class SignOutRequest(BaseModel):
    # Absent when the client only holds the access token.
    refresh_token: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str


# --- Session Contracts ---
class SessionEventType(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    INITIAL_SESSION = "INITIAL_SESSION"


class AuthSession(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    identity: Identity


class SessionResponse(BaseModel):
    session: AuthSession
    profile: ProfileView
