#!/usr/bin/env python3
"""
Response models for API endpoints.

All successful responses share the ``{success, message, data}`` envelope.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MirrorStatus(CamelModel):
    """Outcome of copying the resume into the profile tables."""
    success: bool
    rows_written: int = 0
    error: Optional[str] = None


class ResumeData(CamelModel):
    """A stored resume."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "7f1c6a9e-2b1d-4c8e-9f60-0d4b8e0b7a51",
                "fileName": "jane_doe_resume.pdf",
                "fileUrl": "https://example.supabase.co/storage/v1/object/public/resumes/uid/7f1c/jane_doe_resume.pdf",
                "parsedData": {"personalInfo": {"name": "Jane Doe"}, "processingMethod": "llm-enhanced"},
                "metadata": {
                    "fileSize": 48213,
                    "contentType": "application/pdf",
                    "processingMethod": "llm-enhanced",
                    "confidence": 0.9
                },
                "uploadedAt": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    id: str
    file_name: str
    file_url: Optional[str] = None
    parsed_data: Dict[str, Any]
    metadata: Dict[str, Any] = Field(default_factory=dict)
    status: Optional[str] = None
    uploaded_at: Optional[str] = None
    mirror: Optional[MirrorStatus] = None


class ResumeResponse(BaseModel):
    success: bool = True
    message: str
    data: ResumeData


class ResumeListData(BaseModel):
    resumes: List[ResumeData]
    count: int


class ResumeListResponse(BaseModel):
    success: bool = True
    message: str
    data: ResumeListData


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class DataResponse(BaseModel):
    """Envelope for endpoints returning free-form data."""
    success: bool = True
    message: str
    data: Dict[str, Any]
