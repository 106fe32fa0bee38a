#!/usr/bin/env python3
"""
Resume service - upload, extraction and storage of user resumes.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.errors import DecodeError, PersistenceError, ResumeAccessDeniedError, ResumeNotFoundError
from database.database import Database
from database.models import generate_resume_id
from database.uow import resume_uow
from etl.resume.models import StructuredResume
from etl.resume.orchestrator import ResumeExtractionOrchestrator
from etl.resume.text_extractor import content_type_for
from storage.blob_store import BlobStore, resume_blob_path

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 50


@dataclass(frozen=True)
class MirrorOutcome:
    """Result of a best-effort secondary write."""
    success: bool
    rows_written: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ResumeService:
    """Service for parsing, storing, listing and deleting resumes."""

    def __init__(
        self,
        orchestrator: ResumeExtractionOrchestrator,
        blob_store: BlobStore,
        database: Database,
    ):
        self.orchestrator = orchestrator
        self.blob_store = blob_store
        self.database = database

    def parse_and_store(
        self,
        user_id: str,
        content: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Extract a resume and persist the file and the structured record.

        Extraction runs first, so a decode or strict-mode AI failure leaves
        nothing behind.

        Args:
            user_id: Owner id.
            content: Uploaded file bytes.
            file_name: Original file name.
            content_type: MIME type reported by the client, if any.

        Returns:
            Stored resume: id, fileName, fileUrl, parsedData, metadata,
            uploadedAt and the profile mirror outcome.

        Raises:
            DecodeError: If the file cannot be read.
            LLMExtractionError: If AI extraction fails in strict mode.
            PersistenceError: If the blob or document write fails.
        """
        record = self.orchestrator.extract(content, file_name)

        resume_id = generate_resume_id()
        storage_path = resume_blob_path(user_id, resume_id, file_name)
        stored_type = content_type_for(file_name)
        if stored_type == 'application/octet-stream' and content_type:
            stored_type = content_type

        metadata = {
            'fileSize': len(content),
            'contentType': stored_type,
            'processingMethod': record.processing_method.value,
            'confidence': record.confidence,
        }

        file_url = self.blob_store.put(
            storage_path,
            content,
            stored_type,
            metadata={'userId': user_id, 'resumeId': resume_id, 'originalName': file_name},
        )

        parsed_data = record.to_document()
        try:
            with resume_uow(self.database) as store:
                document = store.resumes.create(
                    resume_id=resume_id,
                    user_id=user_id,
                    file_name=file_name,
                    storage_path=storage_path,
                    file_url=file_url,
                    parsed_data=parsed_data,
                    metadata=metadata,
                )
                result = document.to_dict()
        except SQLAlchemyError as e:
            self._discard_blob(storage_path)
            raise PersistenceError(f"Failed to save resume document: {e}") from e

        logger.info(
            f"Stored resume {resume_id} for user {user_id} "
            f"({record.processing_method.value}, {len(content)} bytes)"
        )

        mirror = self.mirror_structured_profile(user_id, resume_id, record)
        result['mirror'] = mirror.to_dict()
        return result

    def mirror_structured_profile(
        self,
        user_id: str,
        resume_id: str,
        record: StructuredResume,
    ) -> MirrorOutcome:
        """
        Copy education, experience and skills into the profile tables.

        Best-effort: a failure is logged and reported in the outcome, never
        raised, because the resume document is already stored.
        """
        try:
            with resume_uow(self.database) as store:
                rows = store.profile.replace_for_resume(user_id, resume_id, record.to_document())
        except SQLAlchemyError as e:
            logger.warning(f"Profile mirror failed for resume {resume_id}: {e}")
            return MirrorOutcome(success=False, error=str(e))
        return MirrorOutcome(success=True, rows_written=rows)

    def analyze_text(self, text: str) -> Dict[str, Any]:
        """
        Extract a StructuredResume from pasted resume text without storing it.

        Raises:
            DecodeError: If the text is blank.
            LLMExtractionError: If AI extraction fails in strict mode.
        """
        if not text.strip():
            raise DecodeError("Resume text is required")

        record = self.orchestrator.extract_text_record(text)
        return {
            'analysis': record.to_document(),
            'textLength': len(text),
            'generatedAt': record.parsed_at,
        }

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        """
        Profile rows mirrored from the user's latest resume.

        Lists are empty when the user has no resume or the mirror write for
        it failed.
        """
        with resume_uow(self.database) as store:
            latest = store.resumes.get_latest_for_user(user_id)
            if latest is None:
                return {'resumeId': None, 'educations': [], 'experiences': [], 'skills': []}
            profile = store.profile.list_for_user(user_id, resume_id=latest.id)
            return {'resumeId': latest.id, **profile}

    def get_latest(self, user_id: str) -> Dict[str, Any]:
        with resume_uow(self.database) as store:
            document = store.resumes.get_latest_for_user(user_id)
            if document is None:
                raise ResumeNotFoundError("No resume found")
            return document.to_dict()

    def list_resumes(self, user_id: str, limit: int = DEFAULT_LIST_LIMIT) -> List[Dict[str, Any]]:
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        with resume_uow(self.database) as store:
            return [doc.to_dict() for doc in store.resumes.list_for_user(user_id, limit)]

    def delete_resume(self, user_id: str, resume_id: str) -> None:
        """
        Delete a resume, its file and its profile mirror rows.

        Raises:
            ResumeNotFoundError: If no such resume exists.
            ResumeAccessDeniedError: If the resume belongs to another user.
        """
        with resume_uow(self.database) as store:
            document = store.resumes.get_by_id(resume_id)
            if document is None:
                raise ResumeNotFoundError("Resume not found")
            if document.user_id != user_id:
                raise ResumeAccessDeniedError(
                    f"User {user_id} cannot delete resume {resume_id}"
                )

            self._discard_blob(document.storage_path)
            store.profile.delete_for_resume(resume_id)
            store.resumes.delete(resume_id)

        logger.info(f"Deleted resume {resume_id} for user {user_id}")

    def _discard_blob(self, storage_path: str) -> None:
        # Best effort: failures are only logged
        try:
            self.blob_store.delete(storage_path)
        except PersistenceError as e:
            logger.warning(f"Could not delete blob {storage_path}: {e}")
