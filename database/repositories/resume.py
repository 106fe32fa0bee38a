import logging
from typing import List, Optional, Dict, Any
from sqlalchemy import select, delete

from database.models import ResumeDocument
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ResumeRepository(BaseRepository):
    def create(
        self,
        resume_id: str,
        user_id: str,
        file_name: str,
        storage_path: str,
        file_url: str,
        parsed_data: Dict[str, Any],
        metadata: Dict[str, Any],
    ) -> ResumeDocument:
        document = ResumeDocument(
            id=resume_id,
            user_id=user_id,
            file_name=file_name,
            storage_path=storage_path,
            file_url=file_url,
            parsed_data=parsed_data,
            file_metadata=metadata,
            processing_method=metadata['processingMethod'],
            confidence=metadata['confidence'],
            status='processed',
        )
        self.db.add(document)
        self.db.flush()
        return document

    def get_by_id(self, resume_id: str) -> Optional[ResumeDocument]:
        stmt = select(ResumeDocument).where(ResumeDocument.id == resume_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_latest_for_user(self, user_id: str) -> Optional[ResumeDocument]:
        stmt = (
            select(ResumeDocument)
            .where(ResumeDocument.user_id == user_id)
            .order_by(ResumeDocument.uploaded_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: str, limit: int = 10) -> List[ResumeDocument]:
        """Get a user's resumes, newest first.

        Args:
            user_id: Owner id
            limit: Maximum number of documents

        Returns:
            List of ResumeDocument
        """
        stmt = (
            select(ResumeDocument)
            .where(ResumeDocument.user_id == user_id)
            .order_by(ResumeDocument.uploaded_at.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def delete(self, resume_id: str) -> bool:
        result = self.db.execute(delete(ResumeDocument).where(ResumeDocument.id == resume_id))
        self.db.flush()
        return result.rowcount > 0
