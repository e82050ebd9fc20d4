# /app/services/database_service.py

from typing import List, Dict, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.content_repository_sql import ContentRepositorySQL
from .database_helpers.user_repository_sql import UserRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Facade over the SQL repositories. Services talk to this class only,
        so the backing store can change without touching them.
        """
        self.content_repo = ContentRepositorySQL(db_session)
        self.user_repo = UserRepositorySQL(db_session)

    # --- GENERATED CONTENT METHODS (DELEGATED) ---
    def add_content_record(self, record: Dict): return self.content_repo.add_content_record(record)
    def get_content_by_id(self, content_id: int): return self.content_repo.get_content_by_id(content_id)
    def get_contents_by_user_id(self, user_id: str) -> List: return self.content_repo.get_contents_by_user_id(user_id)
    def update_content_data(self, content_id: int, data: Dict): return self.content_repo.update_content_data(content_id, data)
    def delete_content_record(self, content_id: int) -> bool: return self.content_repo.delete_content_record(content_id)

    # --- USER PROFILE METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def add_user(self, user_record: Dict): return self.user_repo.add_user(user_record)

    # --- IDENTITY METHODS (DELEGATED) ---
    def get_identity_by_email(self, email: str): return self.user_repo.get_identity_by_email(email)
    def get_identity_by_id(self, identity_id: str): return self.user_repo.get_identity_by_id(identity_id)
    def add_identity(self, identity_record: Dict): return self.user_repo.add_identity(identity_record)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService instance. When storage
    is not configured, get_db raises StorageUnavailableError before this runs.
    """
    yield DatabaseService(db_session=db)
