# /app/db/models/user_models.py

"""
ORM models for the two halves of a user: the credential record owned by the
identity layer (`auth_identities`) and the application profile (`users`)
that Profile Sync creates lazily on first sign-in.
"""

from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.sql import func
from ..base_class import Base

class AuthIdentity(Base):
    __tablename__ = "auth_identities"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    # full_name, avatar_url and the encrypted apikey captured at sign-up
    user_metadata = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class UserProfileRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # same id as the identity
    fullname = Column(String, nullable=False)
    avatar = Column(String, nullable=False, default="")
    apikey = Column(String, nullable=False, default="")  # Fernet ciphertext
