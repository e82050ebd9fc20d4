# /app/services/database_helpers/user_repository_sql.py

from typing import Dict, Optional
from sqlalchemy.orm import Session
from app.db.models.user_models import AuthIdentity, UserProfileRow

class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Profile Methods (`users` table) ---
    def get_user_by_id(self, user_id: str) -> Optional[UserProfileRow]:
        return self.db.query(UserProfileRow).filter(UserProfileRow.id == user_id).first()

    def add_user(self, record: Dict) -> UserProfileRow:
        new_user = UserProfileRow(**record)
        self.db.add(new_user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(new_user)
        return new_user

    # --- Identity Methods (`auth_identities` table) ---
    def get_identity_by_email(self, email: str) -> Optional[AuthIdentity]:
        return self.db.query(AuthIdentity).filter(AuthIdentity.email == email).first()

    def get_identity_by_id(self, identity_id: str) -> Optional[AuthIdentity]:
        return self.db.query(AuthIdentity).filter(AuthIdentity.id == identity_id).first()

    def add_identity(self, record: Dict) -> AuthIdentity:
        new_identity = AuthIdentity(**record)
        self.db.add(new_identity)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(new_identity)
        return new_identity
