# /app/services/database_helpers/content_repository_sql.py

from typing import List, Dict, Optional
from sqlalchemy.orm import Session
from app.db.models.content_models import GeneratedContentRow

class ContentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_content_record(self, record: Dict) -> GeneratedContentRow:
        """Inserts a row; the database assigns id and created_at."""
        new_row = GeneratedContentRow(**record)
        self.db.add(new_row)
        self.db.commit()
        self.db.refresh(new_row)
        return new_row

    def get_content_by_id(self, content_id: int) -> Optional[GeneratedContentRow]:
        return self.db.query(GeneratedContentRow).filter(GeneratedContentRow.id == content_id).first()

    def get_contents_by_user_id(self, user_id: str) -> List[GeneratedContentRow]:
        """Most recent first; id breaks ties between rows saved in the same clock tick."""
        return (
            self.db.query(GeneratedContentRow)
            .filter(GeneratedContentRow.user_id == user_id)
            .order_by(GeneratedContentRow.created_at.desc(), GeneratedContentRow.id.desc())
            .all()
        )

    def update_content_data(self, content_id: int, data: Dict) -> Optional[GeneratedContentRow]:
        row = self.get_content_by_id(content_id)
        if not row:
            return None
        row.data = data
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete_content_record(self, content_id: int) -> bool:
        row = self.get_content_by_id(content_id)
        if row:
            self.db.delete(row)
            self.db.commit()
            return True
        return False
