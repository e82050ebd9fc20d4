# /app/db/models/content_models.py

from sqlalchemy import Column, Integer, String, JSON, DateTime
from sqlalchemy.sql import func
from ..base_class import Base

class GeneratedContentRow(Base):
    """A saved generation. `data` holds the model's structured reply verbatim."""
    __tablename__ = "generated_content"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    topic = Column(String, nullable=False)
    data = Column(JSON, nullable=False)
    # Owner at save time. Ownership is checked in content_service, not by a FK,
    # because identities may live in an external provider.
    user_id = Column(String, index=True, nullable=False)
