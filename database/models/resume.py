import uuid
import datetime

from sqlalchemy import Column, String, Text, DateTime, Float, Index

from .base import Base, JsonDocument


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def generate_resume_id() -> str:
    return str(uuid.uuid4())


class ResumeDocument(Base):
    """
    One uploaded resume: where its file lives and the structured record
    extracted from it.

    Rows are written once per upload and only ever deleted, never updated.
    """
    __tablename__ = 'resume_documents'

    id = Column(String(36), primary_key=True, default=generate_resume_id)
    user_id = Column(String(128), nullable=False, index=True)

    file_name = Column(Text, nullable=False)
    storage_path = Column(Text, nullable=False)  # resumes/{user_id}/{id}/{file_name}
    file_url = Column(Text, nullable=False)

    # StructuredResume serialized with camelCase keys
    parsed_data = Column(JsonDocument, nullable=False)
    # fileSize, contentType, processingMethod, confidence
    file_metadata = Column('metadata', JsonDocument, nullable=False, default=dict)

    processing_method = Column(String(32), nullable=False)
    confidence = Column(Float, nullable=False)
    status = Column(String(32), nullable=False, default='processed')
    uploaded_at = Column(DateTime(timezone=True), nullable=False, default=_utc_now)

    __table_args__ = (
        Index('idx_resume_documents_user_uploaded', 'user_id', 'uploaded_at'),
    )

    def to_dict(self) -> dict:
        uploaded_at = self.uploaded_at.isoformat() if self.uploaded_at else None
        return {
            'id': self.id,
            'userId': self.user_id,
            'fileName': self.file_name,
            'fileUrl': self.file_url,
            'parsedData': self.parsed_data,
            'metadata': self.file_metadata,
            'status': self.status,
            'uploadedAt': uploaded_at,
        }
