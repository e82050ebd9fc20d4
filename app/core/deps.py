# /app/core/deps.py

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from . import security
from .errors import UnauthenticatedError
from ..models.user_model import Identity

bearer_scheme = HTTPBearer(auto_error=False)


def identity_from_claims(claims: dict) -> Identity:
    return Identity(
        id=claims["sub"],
        email=claims.get("email"),
        full_name=claims.get("full_name"),
        avatar_url=claims.get("avatar_url"),
    )


def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Identity:
    """Resolves the caller from the bearer access token, or fails with 401."""
    if not credentials:
        raise UnauthenticatedError("Not authenticated")

    claims = security.decode_token(credentials.credentials, security.ACCESS_TOKEN_TYPE)
    if claims is None:
        raise UnauthenticatedError("Invalid or expired token")

    return identity_from_claims(claims)
